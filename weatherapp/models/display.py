"""Display-side enums and the condition classification result."""

from dataclasses import dataclass
from enum import StrEnum


class DisplayUnit(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


class ConditionCategory(StrEnum):
    STORMY = "stormy"
    CLOUDY = "cloudy"
    SNOWY = "snowy"
    HOT = "hot"
    DEFAULT = "default"


@dataclass(frozen=True)
class Palette:
    palette_id: str
    colors: tuple[str, ...]


@dataclass(frozen=True)
class Classification:
    category: ConditionCategory
    icon: str
    palette: Palette

    @property
    def palette_id(self) -> str:
        return self.palette.palette_id
