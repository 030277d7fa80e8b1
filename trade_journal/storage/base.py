"""Abstract storage collaborators: position documents and account balances."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

if TYPE_CHECKING:
    from trade_journal.position.model import Position


class PositionStore(ABC):
    """Backing store for positions. Saved positions must round-trip field for field."""

    @abstractmethod
    def load_position(self, position_id: str) -> "Position":
        """Return the stored position. Raise NotFound if absent."""
        pass

    @abstractmethod
    def save_position(self, position: "Position") -> None:
        """Insert or replace. Saving the same position twice is a no-op."""
        pass

    @abstractmethod
    def delete_position(self, position_id: str) -> None:
        """Remove the position and its legs. Raise NotFound if absent."""
        pass

    def list_positions(self) -> List["Position"]:
        """Optional: every stored position. Default empty."""
        return []


class AccountBalanceLookup(ABC):
    """Source of account balances for risk % calculations."""

    @abstractmethod
    def get_account_balance(self, account_id: str) -> Optional[float]:
        """Current balance, or None if unknown."""
        pass


class StaticAccountBalances(AccountBalanceLookup):
    """Balances from a fixed mapping (config.yaml `accounts:`)."""

    def __init__(self, balances: Optional[Mapping[str, float]] = None):
        self._balances: Dict[str, float] = dict(balances or {})

    def get_account_balance(self, account_id: str) -> Optional[float]:
        return self._balances.get(str(account_id))

    def set_balance(self, account_id: str, balance: Optional[float]) -> None:
        if balance is None:
            self._balances.pop(str(account_id), None)
        else:
            self._balances[str(account_id)] = balance
