"""
P&L calculator: per-leg, realized, unrealized and total P&L for one position.
All values are raw floats; never round here (rounding every intermediate sum
drifts visibly once three or more legs exist).
"""

from __future__ import annotations
from typing import Optional

from trade_journal.core.types import ScaleOutLeg
from trade_journal.position.ledger import SIZE_EPSILON
from trade_journal.position.model import Position


def leg_pnl(position: Position, leg: ScaleOutLeg) -> float:
    """(exit - entry) * size * sign. Long profits when price rises, Short when it falls."""
    return (leg.price - position.entry_price) * leg.size * position.direction.sign


def realized_pnl(position: Position) -> float:
    """Sum of closed legs. Zero while nothing is closed or no entry is set."""
    if position.entry_price is None:
        return 0.0
    return sum((leg_pnl(position, leg) for leg in position.scale_outs), 0.0)


def unrealized_pnl(position: Position, mark_price: Optional[float]) -> Optional[float]:
    """Hypothetical P&L on the open remainder at mark_price. None if no mark or nothing open."""
    if mark_price is None or position.entry_price is None:
        return None
    remaining = position.remaining_size()
    if remaining <= SIZE_EPSILON:
        return None
    return (mark_price - position.entry_price) * remaining * position.direction.sign


def total_pnl(position: Position, mark_price: Optional[float] = None) -> float:
    """Manual override wins unchanged; otherwise realized + unrealized (if any)."""
    if position.manual_pnl_override is not None:
        return position.manual_pnl_override
    return realized_pnl(position) + (unrealized_pnl(position, mark_price) or 0.0)


def potential_profit(position: Position) -> Optional[float]:
    """P&L if the full size exits at target. Negative when the target is on the wrong side."""
    if position.entry_price is None or position.target_price is None or position.size is None:
        return None
    return (position.target_price - position.entry_price) * position.size * position.direction.sign


def open_percent(position: Position) -> float:
    """Remaining size as a percentage of the entry size, clamped to 0..100."""
    if not position.size:
        return 0.0
    return max(0.0, min(100.0, position.remaining_size() / position.size * 100.0))


def classify_outcome(pnl: Optional[float]) -> Optional[str]:
    """Journal outcome label for a result."""
    if pnl is None:
        return None
    if pnl > 0:
        return "Win"
    if pnl < 0:
        return "Loss"
    return "Breakeven"
