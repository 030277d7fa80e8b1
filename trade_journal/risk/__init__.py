"""Risk / reward: risk amount, risk %, reward, R-multiple, R-based price levels."""

from trade_journal.risk.calculator import (
    risk_per_unit,
    risk_amount,
    risk_percent,
    risk_percent_for_account,
    reward_per_unit,
    reward_amount,
    r_multiple,
    current_r,
    current_stop_r,
    stop_at_r,
    one_r_price,
)

__all__ = [
    "risk_per_unit",
    "risk_amount",
    "risk_percent",
    "risk_percent_for_account",
    "reward_per_unit",
    "reward_amount",
    "r_multiple",
    "current_r",
    "current_stop_r",
    "stop_at_r",
    "one_r_price",
]
