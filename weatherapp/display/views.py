"""Stateless presentation components: ScreenState -> view models.

Nothing here talks to the network or mutates state; surfaces (CLI text,
dashboard JSON/HTML) render these views through display.formatters.
"""

from dataclasses import dataclass

from weatherapp.display.conditions import PALETTES, background_palette, classify
from weatherapp.display.units import display_value, format_temperature
from weatherapp.models.display import ConditionCategory, DisplayUnit, Palette
from weatherapp.models.weather import ForecastDay, WeatherReading
from weatherapp.screen.state import Failure, Phase, ScreenState


@dataclass(frozen=True)
class SearchBarView:
    placeholder: str = "Search for a city..."


@dataclass(frozen=True)
class LoadingView:
    message: str = "Loading weather data..."


@dataclass(frozen=True)
class DetailView:
    label: str
    value: str
    icon: str


@dataclass(frozen=True)
class WeatherCardView:
    city: str
    country: str
    icon: str
    temperature: str
    condition: str
    feels_like: str
    details: tuple[DetailView, ...]
    sunrise: str
    sunset: str


@dataclass(frozen=True)
class ForecastRowView:
    day: str
    condition: str
    icon: str
    temperatures: str


@dataclass(frozen=True)
class ScreenView:
    phase: Phase
    unit: DisplayUnit
    palette: Palette
    search_bar: SearchBarView | None
    loading: LoadingView | None
    card: WeatherCardView | None
    forecast_title: str
    forecast: tuple[ForecastRowView, ...]
    refreshing: bool
    alert: Failure | None


def submit_search(text: str) -> str | None:
    """What the search bar submits: trimmed text, or nothing when blank."""
    trimmed = (text or "").strip()
    return trimmed or None


def build_weather_card(reading: WeatherReading, unit: DisplayUnit) -> WeatherCardView:
    return WeatherCardView(
        city=reading.city,
        country=reading.country,
        icon=classify(reading.condition, reading.temperature_c).icon,
        temperature=format_temperature(reading.temperature_c, unit),
        condition=reading.condition.capitalize(),
        feels_like=f"Feels like {format_temperature(reading.feels_like_c, unit)}",
        details=(
            DetailView("Humidity", f"{reading.humidity_pct}%", "water-percent"),
            DetailView("Wind", f"{reading.wind_speed_kph:g} km/h", "weather-windy"),
            DetailView("Pressure", f"{reading.pressure_hpa:g} hPa", "gauge"),
            DetailView("Visibility", f"{reading.visibility_km:g} km", "eye"),
        ),
        sunrise=reading.sunrise,
        sunset=reading.sunset,
    )


def build_forecast_rows(
    forecast: tuple[ForecastDay, ...], unit: DisplayUnit
) -> tuple[ForecastRowView, ...]:
    return tuple(
        ForecastRowView(
            day=day.day,
            condition=day.condition,
            icon=classify(day.condition).icon,
            temperatures=(
                f"{display_value(day.high_c, unit)}° / {display_value(day.low_c, unit)}°"
            ),
        )
        for day in forecast
    )


def build_screen(state: ScreenState) -> ScreenView:
    """Compose the whole screen.

    - loading with nothing to show yet: full-screen loading indicator only
    - loading (not a refresh) with data: search bar plus loading indicator
    - otherwise: search bar, weather card and forecast; a refresh keeps the
      current card visible while the new pair is fetched
    """
    if state.phase == Phase.LOADING and not state.has_data:
        return ScreenView(
            phase=state.phase,
            unit=state.unit,
            palette=PALETTES[ConditionCategory.DEFAULT],
            search_bar=None,
            loading=LoadingView(),
            card=None,
            forecast_title="",
            forecast=(),
            refreshing=False,
            alert=None,
        )

    show_spinner = state.phase == Phase.LOADING and not state.refreshing
    card = None
    rows: tuple[ForecastRowView, ...] = ()
    if state.reading is not None and not show_spinner:
        card = build_weather_card(state.reading, state.unit)
        rows = build_forecast_rows(state.forecast, state.unit)

    return ScreenView(
        phase=state.phase,
        unit=state.unit,
        palette=background_palette(state.reading),
        search_bar=SearchBarView(),
        loading=LoadingView() if show_spinner else None,
        card=card,
        forecast_title=f"{len(rows)}-Day Forecast" if rows else "",
        forecast=rows,
        refreshing=state.refreshing,
        alert=state.failure if state.phase == Phase.FAILED else None,
    )
