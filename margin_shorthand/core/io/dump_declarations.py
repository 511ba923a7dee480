from __future__ import annotations

from typing import Any, Iterable

import yaml

from margin_shorthand.core.model import Declaration


def declarations_to_dicts(declarations: Iterable[Declaration]) -> list[dict[str, Any]]:
    return [
        {
            "property": d.name,
            "value": d.value.css_text,
            "important": d.important,
            "origin": d.origin,
        }
        for d in declarations
    ]


def dump_declarations_yaml_text(declarations: Iterable[Declaration]) -> str:
    return yaml.safe_dump(
        {"declarations": declarations_to_dicts(declarations)},
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def dump_declarations_yaml(declarations: Iterable[Declaration], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            {"declarations": declarations_to_dicts(declarations)},
            f,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
