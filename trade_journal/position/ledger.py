"""
Scale-out ledger helpers: allocation check and size aggregation over legs.
Sums are unrounded; display rounding happens at the presentation boundary.
"""

from __future__ import annotations
import math
import uuid
from typing import Iterable, Optional

from trade_journal.core.errors import OverAllocation
from trade_journal.core.types import ScaleOutLeg

# Absorbs float residue from repeated decimal arithmetic (e.g. 0.1 + 0.2)
SIZE_EPSILON = 1e-9


def new_leg_id() -> str:
    return uuid.uuid4().hex


def closed_size(legs: Iterable[ScaleOutLeg], exclude_id: Optional[str] = None) -> float:
    """Sum of leg sizes, optionally skipping one leg (for update checks)."""
    return sum(leg.size for leg in legs if leg.id != exclude_id)


def remaining(size: Optional[float], closed: float) -> float:
    """size - closed, clamped at zero. A residue within SIZE_EPSILON counts as zero."""
    if not size:
        return 0.0
    left = size - closed
    if left <= SIZE_EPSILON:
        return 0.0
    return left


def check_allocation(size: float, other_closed: float, leg_size: float) -> None:
    """
    Raise OverAllocation if leg_size is not a positive finite number or would
    push the closed total above the position size (beyond SIZE_EPSILON). Never clamps.
    """
    if not math.isfinite(leg_size) or leg_size <= 0:
        raise OverAllocation(f"leg size must be a positive finite number, got {leg_size}")
    if other_closed + leg_size > size + SIZE_EPSILON:
        available = max(0.0, size - other_closed)
        raise OverAllocation(f"leg size {leg_size} exceeds remaining size {available}")
