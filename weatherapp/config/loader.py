"""YAML config loader with environment overrides."""

import os
from pathlib import Path

import yaml

from weatherapp.config.schema import AppConfig

API_KEY_ENV = "OPENWEATHER_API_KEY"


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields the defaults. An empty ``api.api_key`` is
    filled from the OPENWEATHER_API_KEY environment variable.
    """
    raw: dict = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    api = raw.get("api") or {}
    raw["api"] = api
    if not api.get("api_key"):
        env_key = os.environ.get(API_KEY_ENV, "")
        if env_key:
            api["api_key"] = env_key

    return AppConfig(**raw)


def redacted(config: AppConfig) -> dict:
    """Config as a plain dict with the API key masked, for display."""
    data = config.model_dump(mode="json")
    if data["api"]["api_key"]:
        data["api"]["api_key"] = "***"
    return data
