"""
Errors raised by the puzzle core.

Gameplay outcomes (mismatched symbols, no path, tapping an empty cell) are not
errors and never raise; these types cover caller mistakes only.
"""

from __future__ import annotations

from typing import Iterable


class OutOfBounds(IndexError):
    """Raised when a coordinate falls outside the grid."""

    def __init__(self, coord: tuple[int, int], size: int) -> None:
        super().__init__(f"cell {tuple(coord)!r} is outside a {size}x{size} grid")
        self.coord = tuple(coord)
        self.size = size


class InvalidCallbackSet(ValueError):
    """Raised when the presentation callbacks are missing or not callable."""

    def __init__(
        self,
        missing: Iterable[str] = (),
        not_callable: Iterable[str] = (),
        unknown: Iterable[str] = (),
    ) -> None:
        self.missing = tuple(missing)
        self.not_callable = tuple(not_callable)
        self.unknown = tuple(unknown)
        parts: list[str] = []
        if self.missing:
            parts.append("missing: " + ", ".join(self.missing))
        if self.not_callable:
            parts.append("not callable: " + ", ".join(self.not_callable))
        if self.unknown:
            parts.append("unknown: " + ", ".join(self.unknown))
        super().__init__("invalid callback set (" + "; ".join(parts or ["no callbacks given"]) + ")")
