"""
Journal performance metrics over closed positions: win rate, profit factor,
expectancy, max drawdown of the cumulative P&L curve, average realized R.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from trade_journal.analytics.pnl import total_pnl
from trade_journal.core.types import PositionStatus
from trade_journal.position.model import Position
from trade_journal.risk.calculator import risk_amount


@dataclass
class JournalMetrics:
    """Aggregate performance metrics."""
    total_pnl: float
    win_rate: float
    profit_factor: float
    expectancy: float
    max_drawdown: float
    total_trades: int
    winning_trades: int
    losing_trades: int
    avg_win: float
    avg_loss: float
    avg_r: Optional[float]


def win_rate(pnls: List[float]) -> float:
    """Fraction of trades with positive PnL."""
    if not pnls:
        return 0.0
    return sum(1 for p in pnls if p > 0) / len(pnls)


def profit_factor(pnls: List[float]) -> float:
    """Gross profit / gross loss. inf if there are wins and no losses."""
    wins = sum(p for p in pnls if p > 0)
    losses = sum(-p for p in pnls if p < 0)
    if losses <= 0:
        return float("inf") if wins > 0 else 0.0
    return wins / losses


def expectancy(pnls: List[float]) -> float:
    """Average PnL per trade."""
    if not pnls:
        return 0.0
    return sum(pnls) / len(pnls)


def max_drawdown(pnls: List[float]) -> float:
    """Largest peak-to-trough drop of the cumulative P&L curve (money, <= 0)."""
    if not pnls:
        return 0.0
    curve = np.concatenate(([0.0], np.cumsum(np.asarray(pnls, dtype=float))))
    peak = np.maximum.accumulate(curve)
    return float(np.min(curve - peak))


def realized_r(position: Position) -> Optional[float]:
    """Total result over initial risk amount (manual override honoured)."""
    amount = risk_amount(position)
    if not amount:
        return None
    return total_pnl(position) / amount


def compute_metrics(positions: Iterable[Position]) -> JournalMetrics:
    """
    Metrics over closed positions in the given order. Open and planned positions
    are skipped; a manual P&L override counts as the position's result.
    """
    closed = [p for p in positions if p.status is PositionStatus.CLOSED]
    pnls = [total_pnl(p) for p in closed]
    total_trades = len(pnls)
    if total_trades == 0:
        return JournalMetrics(
            total_pnl=0.0, win_rate=0.0, profit_factor=0.0, expectancy=0.0, max_drawdown=0.0,
            total_trades=0, winning_trades=0, losing_trades=0, avg_win=0.0, avg_loss=0.0, avg_r=None,
        )
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    r_values = [r for r in (realized_r(p) for p in closed) if r is not None]
    return JournalMetrics(
        total_pnl=float(np.sum(pnls)),
        win_rate=win_rate(pnls),
        profit_factor=profit_factor(pnls),
        expectancy=expectancy(pnls),
        max_drawdown=max_drawdown(pnls),
        total_trades=total_trades,
        winning_trades=len(wins),
        losing_trades=len(losses),
        avg_win=sum(wins) / len(wins) if wins else 0.0,
        avg_loss=sum(losses) / len(losses) if losses else 0.0,
        avg_r=float(np.mean(r_values)) if r_values else None,
    )
