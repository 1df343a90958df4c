"""Projects stored highlights onto freshly rendered scene text."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple

from breakdown_plugin.elements import ElementCategory
from breakdown_plugin.highlight_store import HighlightRecord


@dataclass(frozen=True)
class PaintRange:
    start: int
    end: int
    color: str
    category: ElementCategory
    record_id: str

    @property
    def length(self) -> int:
        return self.end - self.start


def find_occurrences(text: str, needle: str) -> Iterator[Tuple[int, int]]:
    """Yield non-overlapping, case-insensitive literal matches of ``needle``.

    The cursor always advances to the end of the previous hit, so an empty
    needle yields nothing rather than looping.
    """

    if not needle or not text:
        return
    pattern = re.compile(re.escape(needle), re.IGNORECASE)
    cursor = 0
    while cursor <= len(text):
        match = pattern.search(text, cursor)
        if match is None or match.end() == match.start():
            return
        yield match.start(), match.end()
        cursor = match.end()


def match_highlights(text: str, records: Iterable[HighlightRecord]) -> List[PaintRange]:
    """Return the paint ranges for ``records`` over ``text`` with later records on top."""

    if not text:
        return []
    # owner[i] indexes into ``hits`` for the range currently painting character i.
    owner: List[Optional[int]] = [None] * len(text)
    hits: List[HighlightRecord] = []
    for record in records:
        for start, end in find_occurrences(text, record.text):
            serial = len(hits)
            hits.append(record)
            for index in range(start, end):
                owner[index] = serial
    return _collapse(owner, hits)


def _collapse(owner: Sequence[Optional[int]], hits: Sequence[HighlightRecord]) -> List[PaintRange]:
    ranges: List[PaintRange] = []
    run_start = 0
    current = owner[0] if owner else None
    for index in range(1, len(owner) + 1):
        value = owner[index] if index < len(owner) else None
        if index < len(owner) and value == current:
            continue
        if current is not None:
            record = hits[current]
            ranges.append(
                PaintRange(
                    start=run_start,
                    end=index,
                    color=record.category.color,
                    category=record.category,
                    record_id=record.id,
                )
            )
        run_start = index
        current = value
    return ranges


class SceneRecordSource(Protocol):
    def records_for_scene(self, scene_id: str) -> List[HighlightRecord]: ...


class TextHighlightMatcher:
    """Read-only view over a store that answers paint queries per scene."""

    def __init__(self, store: SceneRecordSource) -> None:
        self._store = store

    def paint_ranges(self, scene_id: str, text: str) -> List[PaintRange]:
        return match_highlights(text, self._store.records_for_scene(scene_id))
