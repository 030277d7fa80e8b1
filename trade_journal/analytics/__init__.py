"""Analytics: position P&L, journal metrics, tabular reports."""

from trade_journal.analytics.pnl import (
    leg_pnl,
    realized_pnl,
    unrealized_pnl,
    total_pnl,
    potential_profit,
    open_percent,
    classify_outcome,
)
from trade_journal.analytics.metrics import compute_metrics, JournalMetrics, realized_r
from trade_journal.analytics.report import legs_frame, positions_frame

__all__ = [
    "leg_pnl",
    "realized_pnl",
    "unrealized_pnl",
    "total_pnl",
    "potential_profit",
    "open_percent",
    "classify_outcome",
    "compute_metrics",
    "JournalMetrics",
    "realized_r",
    "legs_frame",
    "positions_frame",
]
