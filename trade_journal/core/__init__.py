"""Core: config, types, errors, logging."""

from trade_journal.core.config import load_config, Config
from trade_journal.core.errors import (
    PositionError,
    MissingRequiredField,
    InvalidTransition,
    OverAllocation,
    NotFound,
    InvalidValue,
)
from trade_journal.core.types import Direction, PositionStatus, ScaleOutLeg, Breakeven, HistoryEvent, HistoryType
from trade_journal.core.logger import setup_logging

__all__ = [
    "load_config",
    "Config",
    "PositionError",
    "MissingRequiredField",
    "InvalidTransition",
    "OverAllocation",
    "NotFound",
    "InvalidValue",
    "Direction",
    "PositionStatus",
    "ScaleOutLeg",
    "Breakeven",
    "HistoryEvent",
    "HistoryType",
    "setup_logging",
]
