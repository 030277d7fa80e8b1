"""Position lifecycle: model, scale-out ledger, derived status."""

from trade_journal.position.model import Position
from trade_journal.position.ledger import SIZE_EPSILON
from trade_journal.position.state import derive_status

__all__ = ["Position", "SIZE_EPSILON", "derive_status"]
