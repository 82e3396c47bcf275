"""Decoder options."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Options:
    """Read-only settings threaded into each Model.

    filename is the verified source file, used only to stamp error locations.
    """

    filename: str = ""

    def merged(self, **overrides: str) -> Options:
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)


DEFAULT_OPTIONS = Options()
