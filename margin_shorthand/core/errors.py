from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional


@dataclass(frozen=True)
class ShorthandError(Exception):
    """A coded problem with a shorthand document, a setting or a CLI argument.

    ``file`` and ``path`` locate the problem: ``path`` is a dotted/indexed
    pointer into the document (``declarations[2].origin``) or the name of
    the offending CLI option.
    """

    source: ClassVar[str] = "cli"

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        loc = ":".join(p for p in (self.file, self.path) if p) or "<input>"
        return f"{loc}: {self.code}: {self.message}"

    def to_item(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "file": self.file,
            "path": self.path,
            "severity": "error",
            "source": self.source,
        }


class ShorthandLoadError(ShorthandError):
    source = "load"


class ShorthandValidationError(ShorthandError):
    source = "validate"
