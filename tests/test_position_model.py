"""Unit tests for position.model: entry, breakeven, manual P&L, lifecycle."""

import pytest
from trade_journal.analytics.pnl import realized_pnl
from trade_journal.core.errors import InvalidTransition, InvalidValue, MissingRequiredField, OverAllocation
from trade_journal.core.types import Breakeven, Direction, HistoryType, PositionStatus
from trade_journal.position.model import Position
from trade_journal.risk.calculator import risk_amount, risk_per_unit


def test_new_position_is_planned():
    p = Position()
    assert p.status is PositionStatus.PLANNED
    assert p.remaining_size() == 0.0
    assert p.total_closed_size() == 0.0
    assert p.scale_outs == []


def test_full_lifecycle():
    p = Position(symbol="EURUSD")
    p.set_entry(Direction.LONG, 1.1000, 1.0950, 1.1150, 10)
    assert p.status is PositionStatus.OPEN
    assert risk_per_unit(p) == pytest.approx(0.0050)
    assert risk_amount(p) == pytest.approx(0.05)

    p.add_leg(4, 1.1080)
    assert p.remaining_size() == pytest.approx(6)
    assert p.status is PositionStatus.PARTIALLY_CLOSED
    assert realized_pnl(p) == pytest.approx(0.032)

    p.add_leg(6, 1.1200)
    assert p.remaining_size() == pytest.approx(0)
    assert p.status is PositionStatus.CLOSED
    # 0.032 + 0.12
    assert realized_pnl(p) == pytest.approx(0.152)


def test_set_entry_missing_fields_keeps_planned():
    p = Position()
    with pytest.raises(MissingRequiredField):
        p.set_entry(Direction.LONG, None, 1.0, 1.2, 10)
    with pytest.raises(MissingRequiredField):
        p.set_entry(Direction.LONG, 1.1, 1.0, 1.2, None)
    assert p.status is PositionStatus.PLANNED
    assert p.entry_price is None
    assert p.stop_price is None
    assert p.history == []


def test_set_entry_rejects_non_positive():
    p = Position()
    with pytest.raises(InvalidValue):
        p.set_entry(Direction.LONG, 1.1, None, None, 0)
    with pytest.raises(InvalidValue):
        p.set_entry(Direction.SHORT, -1.0, None, None, 5)
    assert p.status is PositionStatus.PLANNED


def test_set_entry_stop_and_target_optional():
    p = Position()
    p.set_entry(Direction.SHORT, 50.0, None, None, 2)
    assert p.status is PositionStatus.OPEN
    assert risk_per_unit(p) is None


def test_set_entry_can_be_replaced_while_open_without_legs():
    p = Position()
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    p.set_entry(Direction.SHORT, 101.0, 103.0, 95.0, 3)
    assert p.direction is Direction.SHORT
    assert p.size == 3
    assert p.status is PositionStatus.OPEN


def test_set_entry_after_scale_out_is_invalid():
    p = Position()
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    p.add_leg(1, 101.0)
    with pytest.raises(InvalidTransition):
        p.set_entry(Direction.LONG, 99.0, 97.0, 104.0, 5)
    assert p.entry_price == 100.0
    assert p.size == 5


def test_set_breakeven_defaults_to_entry():
    p = Position()
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    p.set_breakeven(True)
    assert p.breakeven == Breakeven(moved=True, price=100.0)
    p.set_breakeven(True, 100.2)
    assert p.breakeven.price == 100.2
    p.set_breakeven(False)
    assert p.breakeven == Breakeven()


def test_set_breakeven_does_not_close_size():
    p = Position()
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    p.set_breakeven(True)
    assert p.remaining_size() == 5
    assert p.status is PositionStatus.OPEN


def test_set_breakeven_on_closed_is_invalid():
    p = Position()
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    p.close_remaining(103.0)
    with pytest.raises(InvalidTransition):
        p.set_breakeven(True)
    assert p.breakeven == Breakeven()


def test_set_manual_pnl_always_allowed():
    p = Position()
    p.set_manual_pnl(500.0)
    assert p.manual_pnl_override == 500.0
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    p.close_remaining(103.0)
    p.set_manual_pnl(-12.5)
    assert p.manual_pnl_override == -12.5
    p.set_manual_pnl(None)
    assert p.manual_pnl_override is None


def test_history_records_successful_mutations_only():
    p = Position()
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    with pytest.raises(OverAllocation):
        p.add_leg(6, 101.0)
    p.add_leg(2, 101.0)
    p.set_breakeven(True)
    p.close_remaining(102.0)
    p.set_manual_pnl(7.0)
    assert [e.type for e in p.history] == [
        HistoryType.ENTRY,
        HistoryType.PARTIAL,
        HistoryType.BREAKEVEN,
        HistoryType.CLOSE,
        HistoryType.MANUAL,
    ]
    assert p.history[-2].meta["size"] == pytest.approx(3)


def test_direction_parse():
    assert Direction.parse("long") is Direction.LONG
    assert Direction.parse("SELL") is Direction.SHORT
    assert Direction.LONG.sign == 1
    assert Direction.SHORT.sign == -1
    with pytest.raises(ValueError):
        Direction.parse("sideways")


@pytest.mark.parametrize(
    "entry, stop, target, size",
    [
        (float("nan"), None, None, 5),
        (100.0, None, None, float("inf")),
        (100.0, float("nan"), None, 5),
        (100.0, 98.0, float("-inf"), 5),
    ],
)
def test_set_entry_rejects_non_finite(entry, stop, target, size):
    p = Position()
    with pytest.raises(InvalidValue):
        p.set_entry(Direction.LONG, entry, stop, target, size)
    assert p.status is PositionStatus.PLANNED
    assert p.entry_price is None
    assert p.history == []


def test_set_entry_direction_from_text():
    p = Position()
    p.set_entry("short", 100.0, 102.0, None, 1)
    assert p.direction is Direction.SHORT
    with pytest.raises(InvalidValue):
        Position().set_entry("sideways", 100.0, None, None, 1)


def test_set_breakeven_needs_entry():
    p = Position()
    with pytest.raises(InvalidTransition):
        p.set_breakeven(True)
    assert p.breakeven == Breakeven()
    assert p.history == []


def test_non_finite_manual_pnl_and_breakeven_rejected():
    p = Position()
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    with pytest.raises(InvalidValue):
        p.set_manual_pnl(float("nan"))
    with pytest.raises(InvalidValue):
        p.set_breakeven(True, float("inf"))
    assert p.manual_pnl_override is None
    assert p.breakeven == Breakeven()


def test_current_stop_starts_at_initial_stop():
    p = Position()
    assert p.current_stop is None
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    assert p.current_stop == 98.0


def test_move_stop_keeps_initial_risk():
    p = Position()
    p.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    p.move_stop(99.5)
    assert p.current_stop == 99.5
    assert p.stop_price == 98.0
    assert risk_per_unit(p) == 2.0
    assert p.history[-1].type is HistoryType.SL_MOVE
    assert p.history[-1].meta["price"] == 99.5


def test_move_stop_r():
    long_ = Position()
    long_.set_entry(Direction.LONG, 100.0, 98.0, 104.0, 5)
    assert long_.move_stop_r(0.2) == pytest.approx(100.4)
    assert long_.move_stop_r(0) == pytest.approx(100.0)
    # still measured from the initial stop after a move
    assert long_.move_stop_r(0.5) == pytest.approx(101.0)
    short = Position()
    short.set_entry(Direction.SHORT, 50.0, 51.0, 45.0, 2)
    assert short.move_stop_r(0.1) == pytest.approx(49.9)
    assert short.current_stop == pytest.approx(49.9)


def test_move_stop_rejections():
    with pytest.raises(InvalidTransition):
        Position().move_stop(99.0)
    p = Position()
    p.set_entry(Direction.LONG, 100.0, None, None, 5)
    with pytest.raises(MissingRequiredField):
        p.move_stop(None)
    with pytest.raises(InvalidValue):
        p.move_stop(float("nan"))
    with pytest.raises(MissingRequiredField):
        p.move_stop_r(0.5)
    p.set_entry(Direction.LONG, 100.0, 100.0, None, 5)
    with pytest.raises(InvalidValue):
        p.move_stop_r(0.5)
    p.close_remaining(101.0)
    with pytest.raises(InvalidTransition):
        p.move_stop(100.5)
    assert p.current_stop == 100.0
    assert all(e.type is not HistoryType.SL_MOVE for e in p.history)
