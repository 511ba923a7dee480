from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, Optional, cast

from margin_shorthand.core.errors import ShorthandValidationError
from margin_shorthand.core.expand.expand_margin import EXPANSION_TABLES
from margin_shorthand.core.model import ORIGINS, Origin, ShorthandDeclaration


SUPPORTED_PROPERTIES: set[str] = {"margin"}


def validate_declarations(
    doc: dict[str, Any],
    *,
    default_origin: Origin = "author",
    default_important: bool = False,
) -> tuple[Optional[list[ShorthandDeclaration]], list[ShorthandValidationError]]:
    """Validate a loaded shorthand document.

    Returns (declarations, errors). Declarations is None when errors exist.
    Arity is checked here so the expander never sees an unsupported count.
    """

    file = cast(Optional[str], doc.get("__file__"))
    errors: list[ShorthandValidationError] = []

    raw_decls = doc.get("declarations")
    if not isinstance(raw_decls, list):
        errors.append(
            ShorthandValidationError(
                code="E_REQUIRED_FIELD",
                message="declarations is required and must be an array",
                file=file,
                path="declarations",
            )
        )
        return None, _sorted(errors)

    out: list[ShorthandDeclaration] = []

    for i, raw in enumerate(raw_decls):
        decl_path = f"declarations[{i}]"
        if not isinstance(raw, dict):
            errors.append(
                ShorthandValidationError(
                    code="E_INVALID_TYPE",
                    message="declaration must be an object",
                    file=file,
                    path=decl_path,
                )
            )
            continue

        prop = raw.get("property", "margin")
        if not isinstance(prop, str) or prop.strip().lower() not in SUPPORTED_PROPERTIES:
            errors.append(
                ShorthandValidationError(
                    code="E_UNSUPPORTED_PROPERTY",
                    message=f"property must be one of {sorted(SUPPORTED_PROPERTIES)}",
                    file=file,
                    path=f"{decl_path}.property",
                )
            )
            continue

        values = raw.get("values")
        if values is None:
            errors.append(
                ShorthandValidationError(
                    code="E_REQUIRED_FIELD",
                    message="values is required",
                    file=file,
                    path=f"{decl_path}.values",
                )
            )
            continue

        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            errors.append(
                ShorthandValidationError(
                    code="E_INVALID_TYPE",
                    message="values must be an array of strings",
                    file=file,
                    path=f"{decl_path}.values",
                )
            )
            continue

        if len(values) not in EXPANSION_TABLES:
            errors.append(
                ShorthandValidationError(
                    code="E_INVALID_ARITY",
                    message=f"margin takes 1 to 4 values, got {len(values)}",
                    file=file,
                    path=f"{decl_path}.values",
                )
            )
            continue

        important = raw.get("important", default_important)
        if not isinstance(important, bool):
            errors.append(
                ShorthandValidationError(
                    code="E_INVALID_TYPE",
                    message="important must be a boolean",
                    file=file,
                    path=f"{decl_path}.important",
                )
            )

        origin = raw.get("origin", default_origin)
        if origin not in ORIGINS:
            errors.append(
                ShorthandValidationError(
                    code="E_INVALID_ENUM",
                    message=f"origin must be one of {list(ORIGINS)}",
                    file=file,
                    path=f"{decl_path}.origin",
                )
            )

        out.append(
            ShorthandDeclaration(
                property=prop.strip().lower(),
                values=tuple(values),
                important=cast(bool, important),
                origin=cast(Origin, origin),
                index=i,
            )
        )

    if errors:
        return None, _sorted(errors)
    return out, []


def summarize_declarations(declarations: list[ShorthandDeclaration]) -> str:
    counts = Counter(len(d.values) for d in declarations)
    parts = [f"{n}-value={counts.get(n, 0)}" for n in sorted(EXPANSION_TABLES)]
    return f"OK: {len(declarations)} declarations (" + ", ".join(parts) + ")"


def _sorted(errors: Iterable[ShorthandValidationError]) -> list[ShorthandValidationError]:
    return sorted(
        list(errors),
        key=lambda e: (
            e.file or "",
            e.path or "",
            e.code,
        ),
    )
