"""Tabular views (pandas) of legs and positions for display and export."""

from __future__ import annotations
from typing import Dict, Iterable, Optional

import pandas as pd

from trade_journal.analytics.pnl import leg_pnl, open_percent, realized_pnl, total_pnl, unrealized_pnl
from trade_journal.position.model import Position
from trade_journal.risk.calculator import r_multiple, risk_amount

LEG_COLUMNS = ["leg_id", "size", "price", "pnl", "cum_realized", "remaining_after"]
POSITION_COLUMNS = [
    "id", "symbol", "direction", "status", "entry_price", "size", "remaining",
    "open_pct", "realized_pnl", "unrealized_pnl", "total_pnl", "risk_amount", "r_multiple",
]


def legs_frame(position: Position) -> pd.DataFrame:
    """One row per leg in execution order, with running realized P&L and remaining size."""
    if not position.scale_outs:
        return pd.DataFrame(columns=LEG_COLUMNS)
    df = pd.DataFrame(
        {
            "leg_id": [leg.id for leg in position.scale_outs],
            "size": [leg.size for leg in position.scale_outs],
            "price": [leg.price for leg in position.scale_outs],
            "pnl": [leg_pnl(position, leg) for leg in position.scale_outs],
        }
    )
    df["cum_realized"] = df["pnl"].cumsum()
    df["remaining_after"] = (position.size - df["size"].cumsum()).clip(lower=0.0)
    return df[LEG_COLUMNS]


def positions_frame(
    positions: Iterable[Position],
    mark_prices: Optional[Dict[str, float]] = None,
) -> pd.DataFrame:
    """
    One row per position. mark_prices maps position id -> mark price;
    unrealized P&L is empty (NaN) for positions without a mark.
    """
    mark_prices = mark_prices or {}
    rows = []
    for p in positions:
        mark = mark_prices.get(p.id)
        rows.append({
            "id": p.id,
            "symbol": p.symbol,
            "direction": p.direction.value,
            "status": p.status.value,
            "entry_price": p.entry_price,
            "size": p.size,
            "remaining": p.remaining_size(),
            "open_pct": open_percent(p),
            "realized_pnl": realized_pnl(p),
            "unrealized_pnl": unrealized_pnl(p, mark),
            "total_pnl": total_pnl(p, mark),
            "risk_amount": risk_amount(p),
            "r_multiple": r_multiple(p),
        })
    return pd.DataFrame(rows, columns=POSITION_COLUMNS)
