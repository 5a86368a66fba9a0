"""Output formatters for the screen view: text, JSON and HTML."""

import html
import json
from dataclasses import asdict

from weatherapp.display.views import ScreenView
from weatherapp.screen.state import Failure


def format_alert_text(failure: Failure) -> str:
    """Blocking alert block for terminal surfaces."""
    return f"!! {failure.title}\n!! {failure.message}"


def format_screen_text(view: ScreenView) -> str:
    """Plain text rendering for the CLI.

    Failures are not part of the text screen; the CLI prints them once
    through format_alert_text on stderr.
    """
    lines = [f"Theme: {view.palette.palette_id}"]
    if view.search_bar is not None:
        lines.append(f"[ {view.search_bar.placeholder} ]")
    if view.refreshing:
        lines.append("(refreshing...)")
    if view.loading is not None:
        lines.append(view.loading.message)

    card = view.card
    if card is not None:
        lines.append("")
        lines.append(f"{card.city}, {card.country}" if card.country else card.city)
        lines.append(f"  {card.temperature}  [{card.icon}]")
        lines.append(f"  {card.condition}")
        lines.append(f"  {card.feels_like}")
        lines.append(" | ".join(f"{d.label} {d.value}" for d in card.details))
        lines.append(f"Sunrise {card.sunrise} | Sunset {card.sunset}")

    if view.forecast:
        lines.append("")
        lines.append(f"--- {view.forecast_title} ---")
        for row in view.forecast:
            lines.append(f"{row.day:<5} {row.condition:<24} {row.temperatures:>11}")

    return "\n".join(lines)


def screen_to_dict(view: ScreenView) -> dict:
    return asdict(view)


def format_screen_json(view: ScreenView) -> str:
    """JSON rendering for programmatic consumption."""
    return json.dumps(screen_to_dict(view), indent=2)


def format_screen_html(view: ScreenView) -> str:
    """Standalone HTML page for the dashboard, palette as CSS gradient."""
    e = html.escape
    gradient = ", ".join(view.palette.colors)
    parts = [
        "<!doctype html><html><head><meta charset='utf-8'>",
        "<title>Weather</title>",
        "<style>body{margin:0;min-height:100vh;color:#fff;font-family:sans-serif;"
        f"background:linear-gradient({gradient});padding:20px}}"
        ".card,.forecast{background:rgba(255,255,255,.1);border-radius:15px;"
        "padding:20px;margin:10px 0}.row{display:flex;justify-content:space-between}"
        "</style></head><body>",
    ]
    if view.search_bar is not None:
        parts.append(
            "<form method='post' action='/search'>"
            f"<input name='city' placeholder='{e(view.search_bar.placeholder)}'>"
            "<button>Search</button></form>"
            "<form method='post' action='/refresh'><button>Refresh</button></form>"
        )
    if view.alert is not None:
        parts.append(
            f"<div class='alert'><strong>{e(view.alert.title)}</strong> "
            f"{e(view.alert.message)}</div>"
        )
    if view.loading is not None:
        parts.append(f"<p>{e(view.loading.message)}</p>")

    card = view.card
    if card is not None:
        details = "".join(
            f"<div class='row'><span>{e(d.label)}</span><span>{e(d.value)}</span></div>"
            for d in card.details
        )
        parts.append(
            "<div class='card'>"
            f"<h1>{e(card.city)}</h1><p>{e(card.country)}</p>"
            f"<form method='post' action='/unit'><button class='temp'>"
            f"{e(card.temperature)}</button></form>"
            f"<p>{e(card.condition)}</p><p>{e(card.feels_like)}</p>{details}"
            f"<p>Sunrise {e(card.sunrise)} &middot; Sunset {e(card.sunset)}</p>"
            "</div>"
        )
    if view.forecast:
        rows = "".join(
            f"<div class='row'><span>{e(r.day)}</span><span>{e(r.condition)}</span>"
            f"<span>{e(r.temperatures)}</span></div>"
            for r in view.forecast
        )
        parts.append(f"<div class='forecast'><h2>{e(view.forecast_title)}</h2>{rows}</div>")
    parts.append("</body></html>")
    return "".join(parts)
