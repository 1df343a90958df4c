"""Per-scene highlight records and their write-through persistence."""
from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

from breakdown_plugin.elements import ElementCategory, category_from_tag
from breakdown_plugin.settings_blob import SettingsBlob

HIGHLIGHTS_STORAGE_KEY = "scriptHighlights_v2"
# Reference date used by numeric timestamps written by the desktop app.
_APPLE_EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)

LOGGER = logging.getLogger("ScriptBreakdown.Highlights")

CommitListener = Callable[[ElementCategory, str, str], None]


@dataclass(frozen=True)
class HighlightRecord:
    id: str
    scene_id: str
    category: ElementCategory
    text: str
    created_at: datetime

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sceneID": self.scene_id,
            "category": self.category.value,
            "text": self.text,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "HighlightRecord":
        """Decode one persisted record; raises ValueError/KeyError/TypeError when malformed."""

        record_id = payload["id"]
        scene_id = payload["sceneID"]
        text = payload["text"] if "text" in payload else payload["highlightedText"]
        if not isinstance(record_id, str) or not record_id:
            raise ValueError("record id must be a non-empty string")
        if not isinstance(scene_id, str) or not scene_id.strip():
            raise ValueError("sceneID must be a non-empty string")
        if not isinstance(text, str) or not text.strip():
            raise ValueError("highlight text must be a non-empty string")
        category = category_from_tag(payload["category"] if "category" in payload else payload["elementType"])
        raw_date = payload["createdAt"] if "createdAt" in payload else payload["dateCreated"]
        return cls(
            id=record_id,
            scene_id=scene_id,
            category=category,
            text=text,
            created_at=_parse_timestamp(raw_date),
        )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, bool):
        raise TypeError("timestamp cannot be a boolean")
    if isinstance(value, (int, float)):
        return _APPLE_EPOCH + timedelta(seconds=float(value))
    if not isinstance(value, str):
        raise TypeError(f"unsupported timestamp value: {value!r}")
    token = value.strip()
    if token.endswith("Z"):
        token = token[:-1] + "+00:00"
    parsed = datetime.fromisoformat(token)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_record_id() -> str:
    return str(uuid.uuid4()).upper()


class HighlightStore:
    """Sole owner of the highlight collection; every mutation writes through to the blob."""

    def __init__(
        self,
        blob: SettingsBlob,
        *,
        storage_key: str = HIGHLIGHTS_STORAGE_KEY,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._blob = blob
        self._storage_key = storage_key
        self._clock = clock or _utc_now
        self._id_factory = id_factory or _new_record_id
        self._records: List[HighlightRecord] = []
        self._listeners: List[CommitListener] = []

    # Persistence ---------------------------------------------------------

    def load(self) -> List[HighlightRecord]:
        """Replace the in-memory collection with the persisted one (empty when unreadable)."""

        self._records = self._decode(self._blob.read(self._storage_key))
        return list(self._records)

    def _decode(self, raw: Any) -> List[HighlightRecord]:
        if raw is None:
            return []
        try:
            entries = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
            if not isinstance(entries, list):
                raise TypeError(f"expected a JSON array, got {type(entries).__name__}")
            return [HighlightRecord.from_payload(entry) for entry in entries]
        except (ValueError, KeyError, TypeError, OverflowError, RecursionError) as exc:
            LOGGER.debug("Discarding unreadable highlight data under %s: %s", self._storage_key, exc)
            return []

    def save(self) -> bool:
        payload = json.dumps([record.to_payload() for record in self._records])
        if not self._blob.write(self._storage_key, payload):
            LOGGER.debug("Highlight persistence failed; keeping %d records in memory", len(self._records))
            return False
        return True

    # Observers -----------------------------------------------------------

    def on_committed(self, listener: CommitListener) -> Callable[[], None]:
        """Register ``listener(category, text, scene_id)``; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def _notify_committed(self, record: HighlightRecord) -> None:
        for listener in list(self._listeners):
            try:
                listener(record.category, record.text, record.scene_id)
            except Exception:
                LOGGER.debug("Commit listener %r failed for %s", listener, record.id, exc_info=True)

    # CRUD ----------------------------------------------------------------

    def add(self, scene_id: str, category: ElementCategory, text: str) -> Optional[HighlightRecord]:
        trimmed = (text or "").strip()
        scene = (scene_id or "").strip()
        if not trimmed or not scene:
            LOGGER.debug("Ignoring highlight with empty text or scene (scene=%r)", scene_id)
            return None
        record = HighlightRecord(
            id=self._id_factory(),
            scene_id=scene,
            category=category,
            text=trimmed,
            created_at=self._clock(),
        )
        self._records.append(record)
        self.save()
        LOGGER.info("Tagged '%s' as %s", trimmed, category.value)
        self._notify_committed(record)
        return record

    def remove(self, record_id: str) -> None:
        remaining = [record for record in self._records if record.id != record_id]
        if len(remaining) == len(self._records):
            return
        self._records = remaining
        self.save()

    def clear_scene(self, scene_id: str) -> None:
        remaining = [record for record in self._records if record.scene_id != scene_id]
        if len(remaining) == len(self._records):
            return
        self._records = remaining
        self.save()

    def records_for_scene(self, scene_id: str) -> List[HighlightRecord]:
        return [record for record in self._records if record.scene_id == scene_id]

    def records(self) -> List[HighlightRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
