"""Exceptions raised when a multiplet cascade breaks its structural invariants."""

from __future__ import annotations

__all__ = ["CascadeInvariantError"]


class CascadeInvariantError(RuntimeError):
    """Raised when the peaklet layout of a cascade is internally inconsistent."""

    __slots__ = ("stage", "parent_count", "children_count")

    def __init__(self, message: str, *, stage: int, parent_count: int, children_count: int) -> None:
        super().__init__(message)
        self.stage = stage
        self.parent_count = parent_count
        self.children_count = children_count
