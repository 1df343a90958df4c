"""Arbitrates between the armed element category and the live text selection."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from breakdown_plugin.elements import ElementCategory, all_categories
from breakdown_plugin.event_queue import DeferredEventQueue
from breakdown_plugin.highlight_store import HighlightRecord, HighlightStore

LOGGER = logging.getLogger("ScriptBreakdown.Selection")

IDLE_CAPTION = "Highlight Element"
STOP_HIGHLIGHTING = "Stop Highlighting"


class SelectionPhase(Enum):
    IDLE = "idle"
    ARMED = "armed"
    ARMED_WITH_SELECTION = "armed_with_selection"


@dataclass(frozen=True)
class SelectionState:
    armed_category: Optional[ElementCategory] = None
    pending_text: str = ""
    pending_scene_id: str = ""


class SelectionStateMachine:
    """Turns an armed category plus the user's selection into committed highlights.

    Selection reports from the editor surface go through ``queue`` so they are
    applied on the next UI tick rather than during view evaluation. Commits and
    arming are synchronous.
    """

    def __init__(self, store: HighlightStore, queue: DeferredEventQueue) -> None:
        self._store = store
        self._queue = queue
        self._armed: Optional[ElementCategory] = None
        self._pending_text = ""
        self._pending_scene_id = ""
        self._last_auto_tag: Optional[Tuple[str, int, int]] = None

    # State ---------------------------------------------------------------

    @property
    def snapshot(self) -> SelectionState:
        return SelectionState(self._armed, self._pending_text, self._pending_scene_id)

    @property
    def phase(self) -> SelectionPhase:
        if self._armed is None:
            return SelectionPhase.IDLE
        if self._pending_text:
            return SelectionPhase.ARMED_WITH_SELECTION
        return SelectionPhase.ARMED

    @property
    def armed_category(self) -> Optional[ElementCategory]:
        return self._armed

    @property
    def has_selection(self) -> bool:
        return bool(self._pending_text) and self._armed is not None

    @property
    def toolbar_caption(self) -> str:
        return self._armed.value if self._armed is not None else IDLE_CAPTION

    def menu_entries(self) -> List[str]:
        entries = [category.value for category in all_categories()]
        if self._armed is not None:
            entries.append(STOP_HIGHLIGHTING)
        return entries

    # Arming --------------------------------------------------------------

    def arm_category(self, category: ElementCategory) -> None:
        self._armed = category

    def disarm(self) -> None:
        self._armed = None
        self._pending_text = ""
        self._last_auto_tag = None

    # Selection reports ---------------------------------------------------

    def report_selection(self, text: str, scene_id: str) -> None:
        self._queue.post(lambda: self._apply_selection(text, scene_id))

    def report_selection_cleared(self) -> None:
        self._queue.post(self._apply_selection_cleared)

    def _apply_selection(self, text: str, scene_id: str) -> None:
        trimmed = (text or "").strip()
        if not trimmed:
            self._apply_selection_cleared()
            return
        # Recorded in every phase; only an armed machine treats it as pending work.
        self._pending_text = trimmed
        self._pending_scene_id = (scene_id or "").strip()

    def _apply_selection_cleared(self) -> None:
        self._pending_text = ""

    # Commit --------------------------------------------------------------

    def commit(self) -> Optional[HighlightRecord]:
        if self._armed is None or not self._pending_text or not self._pending_scene_id:
            LOGGER.debug(
                "Nothing to commit (armed=%s, selection=%r, scene=%r)",
                self._armed.value if self._armed else None,
                self._pending_text,
                self._pending_scene_id,
            )
            return None
        record = self._store.add(self._pending_scene_id, self._armed, self._pending_text)
        if record is not None:
            self._pending_text = ""
        return record

    def auto_tag(
        self,
        text: str,
        scene_id: str,
        span: Optional[Tuple[int, int]] = None,
    ) -> Optional[HighlightRecord]:
        """Tag ``text`` immediately with the armed category, bypassing the pending selection."""

        if self._armed is None:
            LOGGER.debug("Cannot auto-tag: no element category armed")
            return None
        scene = (scene_id or "").strip()
        if span is not None:
            key = (scene, int(span[0]), int(span[1]))
            if key == self._last_auto_tag:
                LOGGER.debug("Span %s in scene %s already tagged; skipping", span, scene)
                return None
        record = self._store.add(scene, self._armed, text)
        if record is not None and span is not None:
            self._last_auto_tag = (scene, int(span[0]), int(span[1]))
        return record
