"""Error types raised while decoding solver models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class ModelFormatError(ValueError):
    """Internal decoding failure carrying only a message.

    Raised by the literal, chain and function-table decoders. The Model
    converts it into a located ModelError before it reaches callers.
    """


@dataclass(frozen=True)
class Position:
    """A line/column position in the verified source file."""

    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class SourceLocation:
    """Source span an error is attributed to.

    The decoder does not track positions within the model text, so start
    and end are always zero positions.
    """

    file: str
    start: Position = field(default_factory=Position)
    end: Position = field(default_factory=Position)


class ModelError(Exception):
    """Structured failure for a solver model that cannot be decoded."""

    status = "error"
    type = "unrecognized-model"

    def __init__(self, description: str, loc: SourceLocation) -> None:
        super().__init__(description)
        self.description = description
        self.loc = loc

    @classmethod
    def unrecognized(cls, fragment: str, filename: str = "") -> ModelError:
        """Build an error for an offending model fragment."""
        return cls(f"cannot parse smt {fragment}", SourceLocation(file=filename))

    def to_dict(self) -> dict[str, Any]:
        """Return the error payload as plain data."""
        return {
            "status": self.status,
            "type": self.type,
            "loc": {
                "file": self.loc.file,
                "start": {"line": self.loc.start.line, "column": self.loc.start.column},
                "end": {"line": self.loc.end.line, "column": self.loc.end.column},
            },
            "description": self.description,
        }

    def __str__(self) -> str:
        if self.loc.file:
            return f"{self.loc.file}: {self.description}"
        return self.description


class CyclicModelError(ModelError):
    """A reference was reached again while it was still being hydrated."""
