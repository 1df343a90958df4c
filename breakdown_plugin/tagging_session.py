"""Session controller that owns and wires the tagging components for one screen."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from breakdown_plugin.elements import ElementCategory
from breakdown_plugin.event_queue import DeferredEventQueue, Scheduler, immediate_scheduler
from breakdown_plugin.highlight_matcher import PaintRange, TextHighlightMatcher
from breakdown_plugin.highlight_store import CommitListener, HighlightRecord, HighlightStore
from breakdown_plugin.preferences import TaggingPreferences
from breakdown_plugin.selection_state import SelectionStateMachine
from breakdown_plugin.settings_blob import resolve_settings_path
from breakdown_plugin.tag_layout import FlowLayoutResult, compute_flow_layout

LOGGER = logging.getLogger("ScriptBreakdown.Session")


class TaggingSession:
    """Explicitly constructed replacement for a shared highlight manager.

    The session loads the store once, hands the same instance to the selection
    machine and matcher, and exposes the queries the editor surface and badge
    summary need. Catalogs subscribe through :meth:`on_committed`.
    """

    def __init__(
        self,
        *,
        preferences: Optional[TaggingPreferences] = None,
        settings_path: Optional[Path] = None,
        scheduler: Optional[Scheduler] = None,
        store: Optional[HighlightStore] = None,
    ) -> None:
        self.preferences = preferences or TaggingPreferences(settings_path or resolve_settings_path())
        self.store = store or HighlightStore(self.preferences.blob, storage_key=self.preferences.storage_key)
        self.store.load()
        self.events = DeferredEventQueue(scheduler or immediate_scheduler)
        self.selection = SelectionStateMachine(self.store, self.events)
        self.matcher = TextHighlightMatcher(self.store)
        LOGGER.debug(
            "Tagging session ready with %d stored highlights (%s)",
            len(self.store),
            self.preferences.settings_path,
        )

    def on_committed(self, listener: CommitListener) -> Callable[[], None]:
        return self.store.on_committed(listener)

    # Editor surface ------------------------------------------------------

    def arm(self, category: Optional[ElementCategory]) -> None:
        if category is None:
            self.selection.disarm()
        else:
            self.selection.arm_category(category)

    def selection_changed(self, text: str, scene_id: str) -> None:
        if (text or "").strip():
            self.selection.report_selection(text, scene_id)
        else:
            self.selection.report_selection_cleared()

    def tag_selection(self) -> Optional[HighlightRecord]:
        return self.selection.commit()

    def auto_tag(self, text: str, scene_id: str, span: Optional[Tuple[int, int]] = None) -> Optional[HighlightRecord]:
        return self.selection.auto_tag(text, scene_id, span)

    def paint_ranges(self, scene_id: str, text: str) -> List[PaintRange]:
        return self.matcher.paint_ranges(scene_id, text)

    # Badge summary -------------------------------------------------------

    def badge_layout(self, sizes: Sequence[Tuple[float, float]], max_width: Optional[float]) -> FlowLayoutResult:
        return compute_flow_layout(sizes, max_width, self.preferences.badge_spacing)

    def remove_badge(self, record_id: str) -> None:
        self.store.remove(record_id)

    def clear_scene(self, scene_id: str) -> None:
        self.store.clear_scene(scene_id)
