from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol


PropertyName = Literal["margin-top", "margin-right", "margin-bottom", "margin-left"]

MARGIN_TOP: PropertyName = "margin-top"
MARGIN_RIGHT: PropertyName = "margin-right"
MARGIN_BOTTOM: PropertyName = "margin-bottom"
MARGIN_LEFT: PropertyName = "margin-left"

# Clockwise, as in the CSS2 box model.
MARGIN_LONGHANDS: tuple[PropertyName, ...] = (MARGIN_TOP, MARGIN_RIGHT, MARGIN_BOTTOM, MARGIN_LEFT)

Origin = Literal["user-agent", "user", "author"]

# Increasing cascade priority.
ORIGINS: tuple[Origin, ...] = ("user-agent", "user", "author")


class PrimitiveValue(Protocol):
    """Anything already parsed upstream that can report its CSS text."""

    @property
    def css_text(self) -> str: ...


@dataclass(frozen=True)
class CssValue:
    css_text: str


@dataclass(frozen=True)
class ZeroValue:
    """Scalar zero. Stands in for ``auto``, which margins do not support."""

    css_text: str = "0"
    primitive_type: str = "integer"
    float_value: float = 0.0


# Built once at import; shared by every expansion.
ZERO = ZeroValue()


@dataclass(frozen=True)
class Declaration:
    name: PropertyName
    value: PrimitiveValue
    important: bool
    origin: Origin


@dataclass(frozen=True)
class ShorthandDeclaration:
    property: str
    values: tuple[str, ...]
    important: bool
    origin: Origin
    index: int = 0
