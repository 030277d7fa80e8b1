"""In-memory position store. Keeps serialized copies so callers never share state with it."""

from __future__ import annotations
import logging
from typing import Any, Dict, List

from trade_journal.core.errors import NotFound
from trade_journal.position.model import Position
from trade_journal.storage.base import PositionStore
from trade_journal.storage.serialization import position_from_dict, position_to_dict

logger = logging.getLogger("trade_journal.storage")


class InMemoryPositionStore(PositionStore):

    def __init__(self):
        self._docs: Dict[str, Dict[str, Any]] = {}

    def load_position(self, position_id: str) -> Position:
        doc = self._docs.get(position_id)
        if doc is None:
            raise NotFound(f"position {position_id} not found")
        return position_from_dict(doc)

    def save_position(self, position: Position) -> None:
        self._docs[position.id] = position_to_dict(position)
        logger.debug("Saved position %s (%s)", position.id, position.status.value)

    def delete_position(self, position_id: str) -> None:
        if self._docs.pop(position_id, None) is None:
            raise NotFound(f"position {position_id} not found")
        logger.debug("Deleted position %s", position_id)

    def list_positions(self) -> List[Position]:
        return [position_from_dict(doc) for doc in self._docs.values()]
