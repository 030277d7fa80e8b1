"""Unit tests for risk.calculator."""

import pytest
from trade_journal.core.types import Direction
from trade_journal.position.model import Position
from trade_journal.risk.calculator import (
    current_r,
    current_stop_r,
    one_r_price,
    r_multiple,
    reward_amount,
    reward_per_unit,
    risk_amount,
    risk_per_unit,
    risk_percent,
    risk_percent_for_account,
    stop_at_r,
)
from trade_journal.storage.base import StaticAccountBalances


def _position(direction=Direction.LONG, entry=100.0, stop=98.0, target=104.0, size=5, account_id=None):
    p = Position(account_id=account_id)
    p.set_entry(direction, entry, stop, target, size)
    return p


def test_risk_and_reward_per_unit():
    p = _position()
    assert risk_per_unit(p) == 2.0
    assert reward_per_unit(p) == 4.0
    # entry=100, stop=98 => 2 * 5
    assert risk_amount(p) == 10.0
    assert reward_amount(p) == 20.0
    assert r_multiple(p) == pytest.approx(2.0)


def test_short_uses_absolute_distances():
    p = _position(Direction.SHORT, entry=100.0, stop=102.0, target=94.0)
    assert risk_per_unit(p) == 2.0
    assert reward_per_unit(p) == 6.0
    assert r_multiple(p) == pytest.approx(3.0)


def test_unset_prices_give_none():
    p = _position(stop=None, target=None)
    assert risk_per_unit(p) is None
    assert risk_amount(p) is None
    assert reward_per_unit(p) is None
    assert r_multiple(p) is None
    assert risk_per_unit(Position()) is None


def test_zero_risk_r_multiple_is_none():
    p = _position(entry=100.0, stop=100.0, target=104.0)
    assert risk_per_unit(p) == 0.0
    assert r_multiple(p) is None
    assert current_r(p, 103.0) is None
    assert stop_at_r(p, 0.0) is None


def test_r_multiple_without_target():
    assert r_multiple(_position(target=None)) is None


def test_risk_percent():
    p = _position()
    assert risk_percent(p, 1000.0) == pytest.approx(1.0)
    assert risk_percent(p, 0.0) is None
    assert risk_percent(p, None) is None
    assert risk_percent(_position(stop=None), 1000.0) is None


def test_risk_percent_for_account():
    balances = StaticAccountBalances({"main": 10000.0})
    p = _position(account_id="main")
    # 10 / 10000 * 100
    assert risk_percent_for_account(p, balances) == pytest.approx(0.1)
    assert risk_percent_for_account(p, balances, "unknown") is None
    assert risk_percent_for_account(_position(), balances) is None
    balances.set_balance("main", 0.0)
    assert risk_percent_for_account(p, balances) is None


def test_current_r():
    assert current_r(_position(), 103.0) == pytest.approx(1.5)
    assert current_r(_position(), 97.0) == pytest.approx(-1.5)
    short = _position(Direction.SHORT, entry=100.0, stop=102.0, target=94.0)
    assert current_r(short, 97.0) == pytest.approx(1.5)
    assert current_r(short, None) is None


def test_r_based_price_levels():
    p = _position()
    assert one_r_price(p) == pytest.approx(102.0)
    assert stop_at_r(p, 0.0) == pytest.approx(100.0)
    assert stop_at_r(p, 0.5) == pytest.approx(101.0)
    short = _position(Direction.SHORT, entry=100.0, stop=102.0, target=94.0)
    assert one_r_price(short) == pytest.approx(98.0)
    assert stop_at_r(short, -1.0) == pytest.approx(102.0)


def test_current_stop_r():
    p = _position()
    assert current_stop_r(p) == pytest.approx(-1.0)
    p.move_stop(101.0)
    assert current_stop_r(p) == pytest.approx(0.5)
    assert risk_per_unit(p) == 2.0
    assert current_stop_r(Position()) is None
