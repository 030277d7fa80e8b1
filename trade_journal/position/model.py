"""
Position: one trade from entry through partial exits to full closure.

The methods below are the only mutation surface. Each one validates everything
first and writes afterwards, so a rejected call leaves the position untouched.
Status is derived from the ledger on every read (see position.state).
"""

from __future__ import annotations
import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from trade_journal.core.errors import (
    InvalidTransition,
    InvalidValue,
    MissingRequiredField,
    NotFound,
)
from trade_journal.core.types import (
    Breakeven,
    Direction,
    HistoryEvent,
    HistoryType,
    PositionStatus,
    ScaleOutLeg,
)
from trade_journal.position import ledger
from trade_journal.position.state import accepts_legs, derive_status

logger = logging.getLogger("trade_journal.position")


@dataclass
class Position:
    """Entry, stop, target, size, direction and the ordered scale-out legs."""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    direction: Direction = Direction.LONG
    entry_price: Optional[float] = None
    stop_price: Optional[float] = None
    current_stop: Optional[float] = None
    target_price: Optional[float] = None
    size: Optional[float] = None
    scale_outs: List[ScaleOutLeg] = field(default_factory=list)
    breakeven: Breakeven = field(default_factory=Breakeven)
    manual_pnl_override: Optional[float] = None
    symbol: Optional[str] = None
    account_id: Optional[str] = None
    history: List[HistoryEvent] = field(default_factory=list)

    # --- derived state ---

    @property
    def has_entry(self) -> bool:
        return self.entry_price is not None and self.size is not None

    @property
    def status(self) -> PositionStatus:
        return derive_status(self.has_entry, self.total_closed_size(), self.size)

    def total_closed_size(self) -> float:
        return ledger.closed_size(self.scale_outs)

    def remaining_size(self) -> float:
        """Open quantity. Zero while Planned."""
        if not self.has_entry:
            return 0.0
        return ledger.remaining(self.size, self.total_closed_size())

    def get_leg(self, leg_id: str) -> ScaleOutLeg:
        for leg in self.scale_outs:
            if leg.id == leg_id:
                return leg
        raise NotFound(f"scale-out leg {leg_id} not found")

    # --- entry and metadata ---

    def set_entry(
        self,
        direction: Direction,
        entry_price: Optional[float],
        stop_price: Optional[float] = None,
        target_price: Optional[float] = None,
        size: Optional[float] = None,
    ) -> None:
        """
        Set or replace the entry. Planned -> Open on success.
        Not allowed once any scale-out exists: legs were priced against the old entry.
        The current stop starts at the initial stop.
        """
        if self.scale_outs or self.status not in (PositionStatus.PLANNED, PositionStatus.OPEN):
            raise InvalidTransition(f"cannot set entry while {self.status.value} with {len(self.scale_outs)} leg(s)")
        if entry_price is None:
            raise MissingRequiredField("entry price is required")
        if size is None:
            raise MissingRequiredField("size is required")
        _check_finite(entry_price, "entry price")
        _check_finite(size, "size")
        _check_finite(stop_price, "stop price")
        _check_finite(target_price, "target price")
        if entry_price <= 0:
            raise InvalidValue(f"entry price must be positive, got {entry_price}")
        if size <= 0:
            raise InvalidValue(f"size must be positive, got {size}")
        direction = direction if isinstance(direction, Direction) else Direction.parse(direction)

        before = self.status
        self.direction = direction
        self.entry_price = entry_price
        self.stop_price = stop_price
        self.current_stop = stop_price
        self.target_price = target_price
        self.size = size
        self._record(HistoryType.ENTRY, f"Entry {self.direction.value} {size} @ {entry_price}",
                     price=entry_price, size=size)
        self._log_transition(before)

    def set_breakeven(self, moved: bool, price: Optional[float] = None) -> None:
        """Track a stop moved to breakeven. Defaults the price to the entry."""
        status = self.status
        if status is PositionStatus.CLOSED:
            raise InvalidTransition("cannot move stop on a closed position")
        if moved and status is PositionStatus.PLANNED:
            raise InvalidTransition("cannot move stop to breakeven before entry")
        _check_finite(price, "breakeven price")
        if moved and price is None:
            price = self.entry_price
        self.breakeven = Breakeven(moved=bool(moved), price=price if moved else None)
        label = f"Stop moved to breakeven @ {price}" if moved else "Breakeven cleared"
        self._record(HistoryType.BREAKEVEN, label, moved=bool(moved), price=self.breakeven.price)

    def move_stop(self, price: Optional[float]) -> None:
        """
        Move the working stop. The initial stop stays as entered, so risk per unit
        and R values keep their entry-time base.
        """
        status = self.status
        if not accepts_legs(status):
            raise InvalidTransition(f"cannot move stop on a position that is {status.value}")
        if price is None:
            raise MissingRequiredField("stop price is required")
        _check_finite(price, "stop price")
        if price <= 0:
            raise InvalidValue(f"stop price must be positive, got {price}")

        self.current_stop = price
        logger.debug("Position %s: stop moved to %s", self.id, price)
        self._record(HistoryType.SL_MOVE, f"Stop moved to {price}", price=price)

    def move_stop_r(self, offset_r: Optional[float]) -> float:
        """
        Move the working stop `offset_r` R from entry in the profit direction
        (0 is breakeven, -1 the initial stop). Returns the new stop price.
        """
        status = self.status
        if not accepts_legs(status):
            raise InvalidTransition(f"cannot move stop on a position that is {status.value}")
        if offset_r is None:
            raise MissingRequiredField("R offset is required")
        _check_finite(offset_r, "R offset")
        if self.stop_price is None:
            raise MissingRequiredField("initial stop is required to move the stop in R")
        base = abs(self.entry_price - self.stop_price)
        if base == 0:
            raise InvalidValue("initial stop equals entry, 1R is undefined")
        price = self.entry_price + self.direction.sign * offset_r * base
        self.move_stop(price)
        return price

    def set_manual_pnl(self, value: Optional[float]) -> None:
        """User-asserted result (e.g. broker statement). None clears it."""
        _check_finite(value, "manual P&L")
        self.manual_pnl_override = value
        label = f"Manual P&L {value}" if value is not None else "Manual P&L cleared"
        self._record(HistoryType.MANUAL, label, value=value)

    # --- scale-out ledger ---

    def add_leg(self, size: float, price: Optional[float]) -> str:
        """Append a partial exit. Returns the new leg id."""
        status = self.status
        if status is PositionStatus.PLANNED:
            raise InvalidTransition("cannot scale out of a planned position")
        if size is None:
            raise MissingRequiredField("leg size is required")
        if price is None:
            raise MissingRequiredField("exit price is required")
        _check_finite(price, "exit price")
        ledger.check_allocation(self.size, self.total_closed_size(), size)

        leg = ScaleOutLeg(id=ledger.new_leg_id(), size=size, price=price)
        self.scale_outs = self.scale_outs + [leg]
        logger.debug("Position %s: leg %s added (%s @ %s)", self.id, leg.id, size, price)
        self._record(HistoryType.PARTIAL, f"Partial {size} @ {price}", leg_id=leg.id, size=size, price=price)
        self._log_transition(status)
        return leg.id

    def update_leg(self, leg_id: str, size: Optional[float] = None, price: Optional[float] = None) -> None:
        """Patch size and/or price of one leg. Sibling legs are untouched."""
        current = self.get_leg(leg_id)
        new_size = current.size if size is None else size
        new_price = current.price if price is None else price
        _check_finite(new_price, "exit price")
        ledger.check_allocation(self.size, ledger.closed_size(self.scale_outs, exclude_id=leg_id), new_size)

        before = self.status
        patched = ScaleOutLeg(id=leg_id, size=new_size, price=new_price)
        self.scale_outs = [patched if leg.id == leg_id else leg for leg in self.scale_outs]
        logger.debug("Position %s: leg %s updated (%s @ %s)", self.id, leg_id, new_size, new_price)
        self._record(HistoryType.LEG_UPDATE, f"Leg updated {new_size} @ {new_price}",
                     leg_id=leg_id, size=new_size, price=new_price)
        self._log_transition(before)

    def remove_leg(self, leg_id: str) -> None:
        """Delete one leg (undo). May reopen a closed position."""
        leg = self.get_leg(leg_id)
        before = self.status
        self.scale_outs = [other for other in self.scale_outs if other.id != leg_id]
        logger.debug("Position %s: leg %s removed", self.id, leg_id)
        self._record(HistoryType.LEG_REMOVE, f"Leg removed {leg.size} @ {leg.price}",
                     leg_id=leg_id, size=leg.size, price=leg.price)
        self._log_transition(before)

    def close_remaining(self, price: Optional[float]) -> str:
        """Full close: one final leg for everything still open."""
        status = self.status
        if not accepts_legs(status):
            raise InvalidTransition(f"cannot close a position that is {status.value}")
        if price is None:
            raise MissingRequiredField("close price is required")
        _check_finite(price, "close price")

        size = self.remaining_size()
        leg = ScaleOutLeg(id=ledger.new_leg_id(), size=size, price=price)
        self.scale_outs = self.scale_outs + [leg]
        logger.debug("Position %s: closed remaining %s @ %s", self.id, size, price)
        self._record(HistoryType.CLOSE, f"Close {size} @ {price}", leg_id=leg.id, size=size, price=price)
        self._log_transition(status)
        return leg.id

    def close_percent(self, percent: Optional[float], price: Optional[float]) -> str:
        """
        Close a percentage of the *remaining* size (not the original size).
        100 closes exactly what is left, without float residue.
        """
        if percent is None:
            raise MissingRequiredField("percent is required")
        # NaN fails this comparison too
        if not 0 < percent <= 100:
            raise InvalidValue(f"percent must be in (0, 100], got {percent}")
        if not accepts_legs(self.status):
            raise InvalidTransition(f"cannot scale out of a position that is {self.status.value}")
        if percent == 100:
            return self.close_remaining(price)
        return self.add_leg(self.remaining_size() * percent / 100.0, price)

    # --- internals ---

    def _record(self, kind: HistoryType, label: str, **meta) -> None:
        self.history = self.history + [HistoryEvent(type=kind, label=label, meta=meta)]

    def _log_transition(self, before: PositionStatus) -> None:
        after = self.status
        if after is not before:
            logger.info("Position %s: %s -> %s", self.id, before.value, after.value)


def _check_finite(value: Optional[float], name: str) -> None:
    """None passes (absence is checked by the caller); NaN and inf do not."""
    if value is not None and not math.isfinite(value):
        raise InvalidValue(f"{name} must be a finite number, got {value}")
