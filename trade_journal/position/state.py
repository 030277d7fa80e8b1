"""
Position status as a pure function of (has_entry, closed_size, size).
Status is never stored, so it cannot drift from the ledger.
"""

from __future__ import annotations
from typing import Optional

from trade_journal.core.types import PositionStatus
from trade_journal.position.ledger import SIZE_EPSILON


def derive_status(has_entry: bool, closed_size: float, size: Optional[float]) -> PositionStatus:
    """
    Planned -> Open -> PartiallyClosed -> Closed, recomputed on every read.
    Removing legs moves a Closed position back to Open or PartiallyClosed.
    """
    if not has_entry or not size:
        return PositionStatus.PLANNED
    if size - closed_size <= SIZE_EPSILON:
        return PositionStatus.CLOSED
    if closed_size > SIZE_EPSILON:
        return PositionStatus.PARTIALLY_CLOSED
    return PositionStatus.OPEN


def accepts_legs(status: PositionStatus) -> bool:
    """Legs may be appended while Open or PartiallyClosed."""
    return status in (PositionStatus.OPEN, PositionStatus.PARTIALLY_CLOSED)
