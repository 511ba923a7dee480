"""Expansion defaults and their YAML overrides.

Built-in defaults ship with the package; a settings file may replace any of
them. The CLI picks the file from ``--config`` or ``SHORTHAND_CONFIG``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from margin_shorthand.core.model import ORIGINS


OUTPUT_FORMATS: tuple[str, ...] = ("text", "json", "yaml")

DEFAULT_SETTINGS: dict[str, Any] = {
    "origin": "author",
    "important": False,
    "format": "text",
}


class SettingsError(ValueError):
    pass


def load_settings_file(path: str | Path) -> dict[str, Any]:
    """Load settings overrides from a YAML file.

    Format:
      origin: user-agent | user | author
      important: true | false
      format: text | json | yaml

    Every key is optional. Returns only the keys present in the file.
    """
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"settings file is not valid YAML: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SettingsError("settings file must be a mapping")

    out: dict[str, Any] = {}
    for k, v in raw.items():
        if k not in DEFAULT_SETTINGS:
            raise SettingsError(f"unknown setting '{k}' (choose from: {', '.join(sorted(DEFAULT_SETTINGS))})")
        if k == "origin" and v not in ORIGINS:
            raise SettingsError(f"origin must be one of {list(ORIGINS)}")
        if k == "important" and not isinstance(v, bool):
            raise SettingsError("important must be a boolean")
        if k == "format" and v not in OUTPUT_FORMATS:
            raise SettingsError(f"format must be one of {list(OUTPUT_FORMATS)}")
        out[k] = v
    return out


def merged_settings(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    merged = dict(DEFAULT_SETTINGS)
    if overrides:
        merged.update(overrides)
    return merged


def load_and_merge(settings_file: str | None) -> dict[str, Any]:
    if not settings_file:
        return merged_settings()
    return merged_settings(load_settings_file(settings_file))
