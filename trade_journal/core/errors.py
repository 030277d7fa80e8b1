"""
Named failure kinds for position operations. Every failed operation leaves the
Position exactly as it was before the call.
"""

from __future__ import annotations


class PositionError(Exception):
    """Base class. `kind` is the stable name surfaced to the caller."""
    kind = "PositionError"

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind


class MissingRequiredField(PositionError):
    """A transition was attempted without a required input."""
    kind = "MissingRequiredField"


class InvalidTransition(PositionError):
    """Operation not allowed in the current status."""
    kind = "InvalidTransition"


class OverAllocation(PositionError):
    """A scale-out leg would close more size than remains."""
    kind = "OverAllocation"


class NotFound(PositionError, LookupError):
    """Unknown leg id (or unknown position id in a store)."""
    kind = "NotFound"


class InvalidValue(PositionError, ValueError):
    """Value present but unusable (non-positive size, percent out of range)."""
    kind = "InvalidValue"
