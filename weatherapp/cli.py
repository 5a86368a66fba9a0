"""CLI entry point for the weather app."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Callable

from weatherapp.config.loader import load_config, redacted
from weatherapp.config.schema import AppConfig
from weatherapp.display.formatters import (
    format_alert_text,
    format_screen_json,
    format_screen_text,
)
from weatherapp.display.views import build_screen, submit_search
from weatherapp.errors import ConfigurationError
from weatherapp.models.display import DisplayUnit
from weatherapp.screen.controller import ScreenController, build_controller
from weatherapp.screen.state import Failure, Phase

DEFAULT_CONFIG = "weatherapp.yaml"

INTERACTIVE_HELP = (
    "Commands: <city> or 's <city>' search | r refresh | u toggle unit | "
    "t retry | q quit"
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherapp",
        description="Current weather and 5-day forecast",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="Config YAML path")
    parser.add_argument(
        "--unit", choices=[u.value for u in DisplayUnit], help="Initial display unit"
    )
    parser.add_argument("--json", action="store_true", help="Print the screen as JSON")
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None
    )

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("show", help="Weather for the current location")
    search_p = sub.add_parser("search", help="Weather for a city")
    search_p.add_argument("city", nargs="+", help="City name")
    sub.add_parser("interactive", help="Interactive screen")
    serve_p = sub.add_parser("serve", help="Run the web dashboard")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config(args.config)
    logging.basicConfig(
        level=args.log_level or config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "config":
        return _cmd_config(config, args)

    try:
        if args.command == "serve":
            return _cmd_serve(config, args)
        controller = build_controller(
            config,
            prompt=_ask,
            notifier=_alert,
            unit=DisplayUnit(args.unit) if args.unit else None,
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "show":
        asyncio.run(controller.mount())
    elif args.command == "search":
        city = submit_search(" ".join(args.city))
        if city is None:
            print("Error: city name is required", file=sys.stderr)
            return 1
        asyncio.run(controller.search(city))
    elif args.command == "interactive":
        return asyncio.run(_interactive(controller, args.json))
    else:
        parser.print_help()
        return 1

    _print_screen(controller, args.json)
    return 0 if controller.state.phase == Phase.READY else 1


async def _interactive(
    controller: ScreenController,
    as_json: bool,
    read_line: Callable[[str], str] = input,
) -> int:
    print(INTERACTIVE_HELP)
    await controller.mount()
    _print_screen(controller, as_json)

    while True:
        try:
            line = await asyncio.to_thread(read_line, "> ")
        except EOFError:
            break
        command, _, rest = line.strip().partition(" ")
        if command == "q":
            break
        elif command == "r":
            await controller.refresh()
        elif command == "u":
            controller.toggle_unit()
        elif command == "t":
            await controller.retry()
        elif command == "s":
            city = submit_search(rest)
            if city is None:
                print(INTERACTIVE_HELP)
                continue
            await controller.search(city)
        elif command:
            await controller.search(line.strip())
        else:
            continue
        _print_screen(controller, as_json)
    return 0


def _print_screen(controller: ScreenController, as_json: bool) -> None:
    view = build_screen(controller.state)
    if as_json:
        print(format_screen_json(view))
    else:
        print(format_screen_text(view))


def _alert(failure: Failure) -> None:
    print(format_alert_text(failure), file=sys.stderr)


def _ask(question: str) -> bool:
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _cmd_config(config: AppConfig, args: argparse.Namespace) -> int:
    if args.config_command == "show":
        print(json.dumps(redacted(config), indent=2))
        return 0
    print("Use: config show")
    return 1


def _cmd_serve(config: AppConfig, args: argparse.Namespace) -> int:
    import uvicorn

    from weatherapp.dashboard import create_app

    app = create_app(config)
    uvicorn.run(
        app,
        host=args.host or config.dashboard.host,
        port=args.port or config.dashboard.port,
    )
    return 0
