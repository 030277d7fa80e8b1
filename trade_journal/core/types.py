"""
Core data types for positions, scale-out legs, breakeven and history events.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from trade_journal.core.errors import InvalidValue


class Direction(str, Enum):
    LONG = "Long"
    SHORT = "Short"

    @property
    def sign(self) -> int:
        """+1 for Long, -1 for Short. Multiplies every price difference."""
        return 1 if self is Direction.LONG else -1

    @classmethod
    def parse(cls, value: str) -> "Direction":
        """Accept 'long', 'LONG', 'buy', 'Short', 'sell' etc."""
        v = str(value).strip().lower()
        if v in ("long", "buy"):
            return cls.LONG
        if v in ("short", "sell"):
            return cls.SHORT
        raise InvalidValue(f"Unsupported direction: {value}")


class PositionStatus(str, Enum):
    PLANNED = "Planned"
    OPEN = "Open"
    PARTIALLY_CLOSED = "PartiallyClosed"
    CLOSED = "Closed"


class HistoryType(str, Enum):
    ENTRY = "ENTRY"
    PARTIAL = "PARTIAL"
    LEG_UPDATE = "LEG_UPDATE"
    LEG_REMOVE = "LEG_REMOVE"
    CLOSE = "CLOSE"
    BREAKEVEN = "BREAKEVEN"
    SL_MOVE = "SL_MOVE"
    MANUAL = "MANUAL"


@dataclass(frozen=True)
class ScaleOutLeg:
    """One partial close: quantity closed and its execution price."""
    id: str
    size: float
    price: float


@dataclass(frozen=True)
class Breakeven:
    """Stop moved to breakeven. Display/audit only, closes no size."""
    moved: bool = False
    price: Optional[float] = None


@dataclass
class HistoryEvent:
    """Audit trail entry. Never used in calculations."""
    type: HistoryType
    label: str
    time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: dict = field(default_factory=dict)
