"""Celsius/Fahrenheit conversion and the rounding display wrapper.

Temperatures are stored in Celsius everywhere; Fahrenheit only exists at
render time.
"""

import math

from weatherapp.models.display import DisplayUnit

HOT_THRESHOLD_C = 25.0


def to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def convert(celsius: float, unit: DisplayUnit) -> float:
    """Unrounded value of a Celsius reading in the requested unit."""
    if unit == DisplayUnit.FAHRENHEIT:
        return to_fahrenheit(celsius)
    return celsius


def display_value(celsius: float, unit: DisplayUnit) -> int:
    """Convert then round to the nearest integer, halves toward +inf."""
    return math.floor(convert(celsius, unit) + 0.5)


def format_temperature(celsius: float, unit: DisplayUnit) -> str:
    return f"{display_value(celsius, unit)}°{unit.value}"


def toggle(unit: DisplayUnit) -> DisplayUnit:
    if unit == DisplayUnit.CELSIUS:
        return DisplayUnit.FAHRENHEIT
    return DisplayUnit.CELSIUS
