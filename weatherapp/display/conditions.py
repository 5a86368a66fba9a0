"""Condition classifier: free-text API condition -> icon and background palette.

Matching is a case-insensitive substring test evaluated in a fixed priority
order, first match wins:

    1. "rain" or "storm"  -> stormy
    2. "cloud"            -> cloudy
    3. "snow"             -> snowy
    4. temperature > 25C  -> hot
    5. anything else      -> default

The order matters for ambiguous strings: "rain and snow" is stormy, and
"rainy and cold" never reaches the temperature check.
"""

from weatherapp.display.units import HOT_THRESHOLD_C
from weatherapp.models.display import (
    Classification,
    ConditionCategory,
    Palette,
)
from weatherapp.models.weather import WeatherReading

PALETTES: dict[ConditionCategory, Palette] = {
    ConditionCategory.STORMY: Palette("stormy", ("#373B44", "#4286f4", "#73A4F6")),
    ConditionCategory.CLOUDY: Palette("cloudy", ("#83a4d4", "#b6fbff")),
    ConditionCategory.SNOWY: Palette("snowy", ("#E6DADA", "#274046")),
    ConditionCategory.HOT: Palette("hot", ("#FF7300", "#FEF253")),
    ConditionCategory.DEFAULT: Palette("default", ("#4c669f", "#3b5998", "#192f6a")),
}

# Material Design icon names
ICONS: dict[ConditionCategory, str] = {
    ConditionCategory.STORMY: "weather-lightning-rainy",
    ConditionCategory.CLOUDY: "weather-cloudy",
    ConditionCategory.SNOWY: "weather-snowy",
    ConditionCategory.HOT: "weather-sunny",
    ConditionCategory.DEFAULT: "weather-partly-cloudy",
}

_KEYWORDS: list[tuple[tuple[str, ...], ConditionCategory]] = [
    (("rain", "storm"), ConditionCategory.STORMY),
    (("cloud",), ConditionCategory.CLOUDY),
    (("snow",), ConditionCategory.SNOWY),
]


def categorize(
    condition_text: str | None, temperature_c: float | None = None
) -> ConditionCategory:
    text = (condition_text or "").lower()
    for keywords, category in _KEYWORDS:
        if any(k in text for k in keywords):
            return category
    if temperature_c is not None and temperature_c > HOT_THRESHOLD_C:
        return ConditionCategory.HOT
    return ConditionCategory.DEFAULT


def classify(
    condition_text: str | None, temperature_c: float | None = None
) -> Classification:
    """Classify a condition string. Never raises; unknown input is default."""
    category = categorize(condition_text, temperature_c)
    return Classification(
        category=category, icon=ICONS[category], palette=PALETTES[category]
    )


def background_palette(reading: WeatherReading | None) -> Palette:
    """Screen background for the current reading.

    The hot threshold is 25C or its Fahrenheit equivalent 77F, so the
    classification does not depend on the displayed unit.
    """
    if reading is None:
        return PALETTES[ConditionCategory.DEFAULT]
    return classify(reading.condition, reading.temperature_c).palette
