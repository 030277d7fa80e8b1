"""
Position <-> plain dict. Lossless: legs and history keep their order, optional
fields stay None, timestamps travel as ISO-8601 strings.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict

from trade_journal.core.types import Breakeven, Direction, HistoryEvent, HistoryType, ScaleOutLeg
from trade_journal.position.model import Position


def position_to_dict(position: Position) -> Dict[str, Any]:
    return {
        "id": position.id,
        "symbol": position.symbol,
        "account_id": position.account_id,
        "direction": position.direction.value,
        "entry_price": position.entry_price,
        "stop_price": position.stop_price,
        "current_stop": position.current_stop,
        "target_price": position.target_price,
        "size": position.size,
        "scale_outs": [
            {"id": leg.id, "size": leg.size, "price": leg.price}
            for leg in position.scale_outs
        ],
        "breakeven": {"moved": position.breakeven.moved, "price": position.breakeven.price},
        "manual_pnl_override": position.manual_pnl_override,
        "history": [
            {"type": e.type.value, "label": e.label, "time": e.time.isoformat(), "meta": dict(e.meta)}
            for e in position.history
        ],
        # Derived, stored for queries only; ignored on load
        "status": position.status.value,
    }


def position_from_dict(data: Dict[str, Any]) -> Position:
    breakeven = data.get("breakeven") or {}
    return Position(
        id=data["id"],
        symbol=data.get("symbol"),
        account_id=data.get("account_id"),
        direction=Direction(data.get("direction", Direction.LONG.value)),
        entry_price=data.get("entry_price"),
        stop_price=data.get("stop_price"),
        current_stop=data.get("current_stop", data.get("stop_price")),
        target_price=data.get("target_price"),
        size=data.get("size"),
        scale_outs=[
            ScaleOutLeg(id=leg["id"], size=leg["size"], price=leg["price"])
            for leg in data.get("scale_outs", [])
        ],
        breakeven=Breakeven(moved=bool(breakeven.get("moved", False)), price=breakeven.get("price")),
        manual_pnl_override=data.get("manual_pnl_override"),
        history=[
            HistoryEvent(
                type=HistoryType(e["type"]),
                label=e.get("label", ""),
                time=datetime.fromisoformat(e["time"]),
                meta=dict(e.get("meta") or {}),
            )
            for e in data.get("history", [])
        ],
    )
