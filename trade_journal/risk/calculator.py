"""
Risk / reward calculator for one position.
Risk per unit = |entry - stop|, reward per unit = |target - entry|, R = reward / risk.
Zero or unset denominators return None instead of inf/NaN.
"""

from __future__ import annotations
import logging
from typing import Optional

from trade_journal.position.model import Position
from trade_journal.storage.base import AccountBalanceLookup

logger = logging.getLogger("trade_journal.risk")


def risk_per_unit(position: Position) -> Optional[float]:
    if position.entry_price is None or position.stop_price is None:
        return None
    return abs(position.entry_price - position.stop_price)


def risk_amount(position: Position) -> Optional[float]:
    """Money lost if the full size is stopped out."""
    per_unit = risk_per_unit(position)
    if per_unit is None or position.size is None:
        return None
    return per_unit * position.size


def risk_percent(position: Position, account_balance: Optional[float]) -> Optional[float]:
    """Risk amount as % of account balance. None for unset or zero balance."""
    if not account_balance:
        return None
    amount = risk_amount(position)
    if amount is None:
        return None
    return amount / account_balance * 100.0


def risk_percent_for_account(
    position: Position,
    balances: AccountBalanceLookup,
    account_id: Optional[str] = None,
) -> Optional[float]:
    """risk_percent with the balance looked up for the position's account."""
    account_id = account_id or position.account_id
    if account_id is None:
        return None
    balance = balances.get_account_balance(account_id)
    if balance is None:
        logger.debug("No balance for account %s, risk %% unavailable", account_id)
    return risk_percent(position, balance)


def reward_per_unit(position: Position) -> Optional[float]:
    if position.entry_price is None or position.target_price is None:
        return None
    return abs(position.target_price - position.entry_price)


def reward_amount(position: Position) -> Optional[float]:
    per_unit = reward_per_unit(position)
    if per_unit is None or position.size is None:
        return None
    return per_unit * position.size


def r_multiple(position: Position) -> Optional[float]:
    """Reward in units of risk. entry == stop gives None, not a division error."""
    risk = risk_per_unit(position)
    if not risk:
        return None
    reward = reward_per_unit(position)
    if reward is None:
        return None
    return reward / risk


def current_r(position: Position, mark_price: Optional[float]) -> Optional[float]:
    """Signed move from entry to mark, in R. Positive means in profit."""
    risk = risk_per_unit(position)
    if not risk or mark_price is None:
        return None
    return (mark_price - position.entry_price) * position.direction.sign / risk


def current_stop_r(position: Position) -> Optional[float]:
    """Working stop in R from entry, against the initial risk. 0 once at breakeven."""
    if position.current_stop is None:
        return None
    return current_r(position, position.current_stop)


def stop_at_r(position: Position, offset_r: float) -> Optional[float]:
    """
    Stop price `offset_r` R away from entry in the profit direction.
    0 is breakeven, -1 is the original stop distance.
    """
    risk = risk_per_unit(position)
    if not risk:
        return None
    return position.entry_price + position.direction.sign * offset_r * risk


def one_r_price(position: Position) -> Optional[float]:
    """Price one R in profit; the usual first scale-out level."""
    return stop_at_r(position, 1.0)
