from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import List, Union

from trade_journal.core.errors import NotFound
from trade_journal.position.model import Position
from trade_journal.storage.base import PositionStore
from trade_journal.storage.serialization import position_from_dict, position_to_dict

logger = logging.getLogger("trade_journal.storage")


class SqlitePositionStore(PositionStore):
    """SQLite document store: one JSON document per position.

    Legs and history live inside the document, so deleting a position deletes
    its legs and a save replaces the whole position atomically.
    """

    def __init__(self, path: Union[str, Path] = "./data/positions.sqlite3"):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with sqlite3.connect(self.path) as con:
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS positions (
                    id TEXT PRIMARY KEY,
                    status TEXT NOT NULL,
                    updated_at_unix REAL NOT NULL,
                    doc_json TEXT NOT NULL
                )
                """
            )
            con.commit()

    def load_position(self, position_id: str) -> Position:
        with sqlite3.connect(self.path) as con:
            row = con.execute("SELECT doc_json FROM positions WHERE id=?", (position_id,)).fetchone()
        if not row:
            raise NotFound(f"position {position_id} not found")
        return position_from_dict(json.loads(row[0]))

    def save_position(self, position: Position) -> None:
        doc = position_to_dict(position)
        with sqlite3.connect(self.path) as con:
            con.execute(
                "INSERT OR REPLACE INTO positions(id, status, updated_at_unix, doc_json) VALUES(?,?,?,?)",
                (position.id, doc["status"], time.time(), json.dumps(doc, ensure_ascii=False)),
            )
            con.commit()
        logger.info("Saved position %s (%s)", position.id, doc["status"])

    def delete_position(self, position_id: str) -> None:
        with sqlite3.connect(self.path) as con:
            cur = con.execute("DELETE FROM positions WHERE id=?", (position_id,))
            con.commit()
        if cur.rowcount == 0:
            raise NotFound(f"position {position_id} not found")
        logger.info("Deleted position %s", position_id)

    def list_positions(self) -> List[Position]:
        with sqlite3.connect(self.path) as con:
            rows = con.execute("SELECT doc_json FROM positions ORDER BY updated_at_unix").fetchall()
        return [position_from_dict(json.loads(r[0])) for r in rows]
