from __future__ import annotations

import logging
from typing import Callable, Sequence

from margin_shorthand.core.model import (
    MARGIN_BOTTOM,
    MARGIN_LEFT,
    MARGIN_RIGHT,
    MARGIN_TOP,
    ZERO,
    Declaration,
    Origin,
    PrimitiveValue,
    PropertyName,
)

logger = logging.getLogger(__name__)


DeclarationBuilder = Callable[[PropertyName, PrimitiveValue, bool, Origin], Declaration]


# Arity -> (longhand, input index) pairs, in emission order.
# The 2- and 3-value orders are not clockwise; callers already depend on them.
EXPANSION_TABLES: dict[int, tuple[tuple[PropertyName, int], ...]] = {
    1: ((MARGIN_TOP, 0), (MARGIN_RIGHT, 0), (MARGIN_BOTTOM, 0), (MARGIN_LEFT, 0)),
    2: ((MARGIN_TOP, 0), (MARGIN_BOTTOM, 0), (MARGIN_RIGHT, 1), (MARGIN_LEFT, 1)),
    3: ((MARGIN_TOP, 0), (MARGIN_RIGHT, 1), (MARGIN_LEFT, 1), (MARGIN_BOTTOM, 2)),
    4: ((MARGIN_TOP, 0), (MARGIN_RIGHT, 1), (MARGIN_BOTTOM, 2), (MARGIN_LEFT, 3)),
}


def is_auto(value: PrimitiveValue) -> bool:
    return value.css_text.strip().lower() == "auto"


def substitute_auto(value: PrimitiveValue) -> PrimitiveValue:
    """Return ZERO for an ``auto`` value, otherwise ``value`` itself."""
    if is_auto(value):
        return ZERO
    return value


def expand_margin(
    values: Sequence[PrimitiveValue],
    *,
    important: bool = False,
    origin: Origin = "author",
    make_declaration: DeclarationBuilder = Declaration,
) -> list[Declaration]:
    """Expand a ``margin`` shorthand into its four longhand declarations.

    Each input is checked for ``auto`` exactly once, before it is repeated
    across sides. ``important`` and ``origin`` are copied onto every
    declaration unchanged.

    An arity outside 1..4 yields an empty list; validating arity is the
    caller's job.
    """

    table = EXPANSION_TABLES.get(len(values))
    if table is None:
        logger.debug(
            "margin shorthand with %d values not expanded",
            len(values),
            extra={"arity": len(values)},
        )
        return []

    resolved = [substitute_auto(v) for v in values]
    return [make_declaration(name, resolved[i], important, origin) for name, i in table]
