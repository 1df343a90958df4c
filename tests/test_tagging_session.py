from __future__ import annotations

from pathlib import Path

from breakdown_plugin.elements import ElementCategory
from breakdown_plugin.highlight_store import HighlightStore
from breakdown_plugin.preferences import TaggingPreferences
from breakdown_plugin.selection_state import SelectionPhase
from breakdown_plugin.tagging_session import TaggingSession


class FakeScheduler:
    def __init__(self) -> None:
        self.callbacks = []

    def __call__(self, callback) -> None:
        self.callbacks.append(callback)

    def run_tick(self) -> None:
        callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            callback()


def test_session_wires_selection_store_and_catalog(tmp_path: Path) -> None:
    scheduler = FakeScheduler()
    session = TaggingSession(settings_path=tmp_path / "settings.json", scheduler=scheduler)
    catalog = []
    session.on_committed(lambda category, text, scene: catalog.append((category.value, text, scene)))

    session.arm(ElementCategory.PROPS)
    session.selection_changed("lamp", "scene1")
    assert session.tag_selection() is None

    scheduler.run_tick()
    record = session.tag_selection()

    assert record is not None
    assert catalog == [("Props", "lamp", "scene1")]
    assert session.selection.phase is SelectionPhase.ARMED

    session.selection_changed("", "scene1")
    scheduler.run_tick()
    assert session.tag_selection() is None

    session.arm(None)
    assert session.selection.phase is SelectionPhase.IDLE


def test_session_reloads_persisted_highlights(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    first = TaggingSession(settings_path=path)
    first.arm(ElementCategory.CAST)
    first.auto_tag("ANNA", "s1")
    first.auto_tag("lamp", "s2")

    second = TaggingSession(settings_path=path)

    ranges = second.paint_ranges("s1", "Anna enters. ANNA sits.")
    assert [(paint.start, paint.end) for paint in ranges] == [(0, 4), (13, 17)]
    assert second.paint_ranges("s2", "Anna enters.") == []


def test_session_badge_layout_uses_preferences(tmp_path: Path) -> None:
    preferences = TaggingPreferences(tmp_path / "settings.json")
    preferences.badge_spacing = 10.0
    session = TaggingSession(preferences=preferences)

    result = session.badge_layout([(50, 20), (60, 24)], 100)

    assert result.positions == [(0.0, 0.0), (0.0, 30.0)]


def test_remove_badge_and_clear_scene(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    store = HighlightStore(TaggingPreferences(path).blob)
    session = TaggingSession(settings_path=path, store=store)
    session.arm(ElementCategory.PROPS)
    lamp = session.auto_tag("lamp", "s1")
    session.auto_tag("knife", "s1")
    session.auto_tag("rope", "s2")
    assert lamp is not None

    session.remove_badge(lamp.id)
    session.remove_badge(lamp.id)
    assert [record.text for record in store.records_for_scene("s1")] == ["knife"]

    session.clear_scene("s1")
    assert [record.text for record in store.records()] == ["rope"]
