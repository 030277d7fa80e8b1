"""Storage: position store interface, in-memory and sqlite stores, account balances."""

from trade_journal.storage.base import PositionStore, AccountBalanceLookup, StaticAccountBalances
from trade_journal.storage.memory import InMemoryPositionStore
from trade_journal.storage.sqlite import SqlitePositionStore
from trade_journal.storage.serialization import position_to_dict, position_from_dict

__all__ = [
    "PositionStore",
    "AccountBalanceLookup",
    "StaticAccountBalances",
    "InMemoryPositionStore",
    "SqlitePositionStore",
    "position_to_dict",
    "position_from_dict",
]
