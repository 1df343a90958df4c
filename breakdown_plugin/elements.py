"""Production element taxonomy used to tag screenplay text."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Tuple, TypeVar


class UnknownCategoryError(ValueError):
    """Raised when a persisted category tag does not name a known element."""


@dataclass(frozen=True)
class ElementMetadata:
    name: str
    icon: str
    color: str


class ElementCategory(Enum):
    """Closed set of breakdown categories; declaration order is display order."""

    CAST = "Cast"
    STUNTS = "Stunts"
    EXTRAS = "Extras"
    PROPS = "Props"
    WARDROBE = "Wardrobe"
    MAKEUP_HAIR = "Makeup/Hair"
    SET_DRESSING = "Set Dressing"
    SPECIAL_EFFECTS = "Special Effects"
    VISUAL_EFFECTS = "Visual Effects"
    ANIMALS = "Animals"
    VEHICLES = "Vehicles"
    SPECIAL_EQUIPMENT = "Special Equipment"
    SOUND = "Sound"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def icon(self) -> str:
        return _METADATA[self].icon

    @property
    def color(self) -> str:
        return _METADATA[self].color


_METADATA: Dict[ElementCategory, ElementMetadata] = {
    ElementCategory.CAST: ElementMetadata("Cast", "person.2.fill", "#007aff"),
    ElementCategory.STUNTS: ElementMetadata("Stunts", "figure.run", "#ff9500"),
    ElementCategory.EXTRAS: ElementMetadata("Extras", "person.3.fill", "#00c7be"),
    ElementCategory.PROPS: ElementMetadata("Props", "cube.fill", "#af52de"),
    ElementCategory.WARDROBE: ElementMetadata("Wardrobe", "tshirt.fill", "#ff2d55"),
    ElementCategory.MAKEUP_HAIR: ElementMetadata("Makeup/Hair", "sparkles", "#34c759"),
    ElementCategory.SET_DRESSING: ElementMetadata("Set Dressing", "sofa.fill", "#a2845e"),
    ElementCategory.SPECIAL_EFFECTS: ElementMetadata("Special Effects", "flame.fill", "#ff3b30"),
    ElementCategory.VISUAL_EFFECTS: ElementMetadata("Visual Effects", "wand.and.stars", "#32ade6"),
    ElementCategory.ANIMALS: ElementMetadata("Animals", "pawprint.fill", "#ffcc00"),
    ElementCategory.VEHICLES: ElementMetadata("Vehicles", "car.fill", "#30b0c7"),
    ElementCategory.SPECIAL_EQUIPMENT: ElementMetadata("Special Equipment", "case.fill", "#5856d6"),
    ElementCategory.SOUND: ElementMetadata("Sound", "waveform", "#8e8e93"),
}


def all_categories() -> Tuple[ElementCategory, ...]:
    """Return every category in canonical display order."""
    return tuple(ElementCategory)


def metadata(category: ElementCategory) -> ElementMetadata:
    return _METADATA[category]


def category_from_tag(tag: object) -> ElementCategory:
    """Return the category whose persisted tag is ``tag``."""
    if isinstance(tag, str):
        for category in ElementCategory:
            if category.value == tag:
                return category
    raise UnknownCategoryError(f"Unknown element category: {tag!r}")


_R = TypeVar("_R")


def group_by_category(records: Iterable[_R]) -> List[Tuple[ElementCategory, List[_R]]]:
    """Bucket records by ``record.category`` in display order, skipping empty buckets."""

    buckets: Dict[ElementCategory, List[_R]] = {}
    for record in records:
        buckets.setdefault(getattr(record, "category"), []).append(record)
    return [(category, buckets[category]) for category in ElementCategory if category in buckets]
