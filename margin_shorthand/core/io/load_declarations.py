from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from margin_shorthand.core.errors import ShorthandLoadError


YAML_SUFFIXES: set[str] = {".yaml", ".yml"}


def load_declarations(path: str) -> dict[str, Any]:
    """Load a YAML/JSON document of margin shorthands.

    Returns a dict with keys: declarations, __file__.
    Does not coerce types; validator owns shape checking.
    """

    p = Path(path)
    if not p.exists():
        raise ShorthandLoadError(code="E_FILE_NOT_FOUND", message="file does not exist", file=str(p))

    suffix = p.suffix.lower()
    if suffix not in YAML_SUFFIXES and suffix != ".json":
        raise ShorthandLoadError(
            code="E_UNSUPPORTED_FORMAT",
            message="supported formats are .yaml/.yml and .json",
            file=str(p),
        )

    try:
        raw_text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ShorthandLoadError(code="E_FILE_READ", message=str(e), file=str(p)) from e

    if suffix in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as e:
            raise ShorthandLoadError(code="E_YAML_PARSE", message=str(e), file=str(p)) from e
    else:
        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise ShorthandLoadError(code="E_JSON_PARSE", message=str(e), file=str(p)) from e

    if not isinstance(data, dict):
        raise ShorthandLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="top-level document must be a mapping, with shorthands under 'declarations'",
            file=str(p),
        )

    return {"declarations": data.get("declarations"), "__file__": str(p)}
