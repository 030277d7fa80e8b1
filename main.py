#!/usr/bin/env python3
"""
Position manager CLI over the sqlite journal store.
Usage:
  python main.py new [--symbol EURUSD] [--account main]
  python main.py entry ID --direction long --entry 1.1 --stop 1.095 --target 1.115 --size 10
  python main.py scale-out ID --size 4 --price 1.108
  python main.py close-percent ID --percent 50 --price 1.11
  python main.py move-stop ID --r 0.5
  python main.py close ID --price 1.12
  python main.py show ID [--mark 1.105]
  python main.py summary
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from trade_journal.analytics.metrics import compute_metrics
from trade_journal.analytics.pnl import (
    classify_outcome,
    open_percent,
    potential_profit,
    realized_pnl,
    total_pnl,
    unrealized_pnl,
)
from trade_journal.analytics.report import legs_frame, positions_frame
from trade_journal.core.config import Config, load_config
from trade_journal.core.errors import PositionError
from trade_journal.core.logger import setup_logging
from trade_journal.core.types import Direction, PositionStatus
from trade_journal.position.model import Position
from trade_journal.risk.calculator import (
    current_r,
    current_stop_r,
    one_r_price,
    r_multiple,
    risk_amount,
    risk_per_unit,
    risk_percent_for_account,
)
from trade_journal.storage.base import PositionStore, StaticAccountBalances
from trade_journal.storage.sqlite import SqlitePositionStore
from trade_journal.utils.formatting import format_money, format_percent, format_price, format_signed
from trade_journal.utils.numeric import normalize, require

logger = logging.getLogger("trade_journal.cli")


def print_position(position: Position, config: Config, mark: Optional[float] = None) -> None:
    """Human-readable position card. All rounding happens here."""
    money, px = config.money_decimals, config.price_decimals
    balances = StaticAccountBalances(config.account_balances)
    status = position.status
    print(f"\n--- Position {position.id} ---")
    print(f"Symbol: {position.symbol or '--'} | Account: {position.account_id or '--'}")
    print(f"Status: {status.value} | Direction: {position.direction.value}")
    print(f"Entry: {format_price(position.entry_price, px)} | Stop: {format_price(position.stop_price, px)} "
          f"| Target: {format_price(position.target_price, px)}")
    print(f"Size: {position.size if position.size is not None else '--'} | "
          f"Remaining: {position.remaining_size():g} ({open_percent(position):.1f}% open)")
    print(f"Risk/unit: {format_price(risk_per_unit(position), px)} | Risk: {format_money(risk_amount(position), money)} "
          f"| Risk %: {format_percent(risk_percent_for_account(position, balances))}")
    rr = r_multiple(position)
    print(f"R-multiple: {'--' if rr is None else f'{rr:.2f}'} | 1R price: {format_price(one_r_price(position), px)} "
          f"| Potential: {format_signed(potential_profit(position), money)}")
    if position.current_stop is not None and position.current_stop != position.stop_price:
        sr = current_stop_r(position)
        print(f"Current stop: {format_price(position.current_stop, px)}"
              f"{'' if sr is None else f' ({sr:+.2f}R)'}")
    if position.breakeven.moved:
        print(f"Breakeven: stop moved @ {format_price(position.breakeven.price, px)}")
    print(f"Realized P&L: {format_signed(realized_pnl(position), money)}")
    if mark is not None:
        cr = current_r(position, mark)
        print(f"Unrealized P&L @ {format_price(mark, px)}: {format_signed(unrealized_pnl(position, mark), money)} "
              f"| Current R: {'--' if cr is None else f'{cr:.2f}'}")
    total = total_pnl(position, mark)
    manual = " (manual)" if position.manual_pnl_override is not None else ""
    print(f"Total P&L: {format_signed(total, money)}{manual}")
    if status is PositionStatus.CLOSED:
        print(f"Outcome: {classify_outcome(total)}")
    legs = legs_frame(position)
    if not legs.empty:
        print("\nScale-outs:")
        print(legs.to_string(index=False))


def run_command(args: argparse.Namespace, config: Config, store: PositionStore) -> int:
    """Apply one CLI command. Position is saved only after a successful mutation."""
    cmd = args.command
    if cmd == "new":
        position = Position(symbol=args.symbol, account_id=args.account)
        store.save_position(position)
        print(position.id)
        return 0
    if cmd == "list":
        positions = store.list_positions()
        if not positions:
            print("No positions.")
            return 0
        print(positions_frame(positions).to_string(index=False))
        return 0
    if cmd == "summary":
        m = compute_metrics(store.list_positions())
        print("\n--- Journal Summary ---")
        print(f"Closed trades: {m.total_trades} (wins: {m.winning_trades}, losses: {m.losing_trades})")
        print(f"Total P&L: {format_signed(m.total_pnl, config.money_decimals)}")
        print(f"Win rate: {m.win_rate*100:.1f}%")
        print(f"Profit factor: {m.profit_factor:.2f}")
        print(f"Expectancy: {format_signed(m.expectancy, config.money_decimals)} per trade")
        print(f"Max drawdown: {format_money(m.max_drawdown, config.money_decimals)}")
        print(f"Average R: {'--' if m.avg_r is None else f'{m.avg_r:.2f}'}")
        return 0
    if cmd == "delete":
        store.delete_position(args.id)
        print(f"Deleted {args.id}")
        return 0

    position = store.load_position(args.id)
    if cmd == "show":
        print_position(position, config, normalize(args.mark))
        return 0
    if cmd == "entry":
        position.set_entry(
            Direction.parse(args.direction),
            normalize(args.entry),
            normalize(args.stop),
            normalize(args.target),
            normalize(args.size),
        )
    elif cmd == "scale-out":
        leg_id = position.add_leg(require(args.size, "size"), require(args.price, "price"))
        print(leg_id)
    elif cmd == "close-percent":
        leg_id = position.close_percent(require(args.percent, "percent"), require(args.price, "price"))
        print(leg_id)
    elif cmd == "update-leg":
        position.update_leg(args.leg_id, size=normalize(args.size), price=normalize(args.price))
    elif cmd == "remove-leg":
        position.remove_leg(args.leg_id)
    elif cmd == "close":
        leg_id = position.close_remaining(require(args.price, "price"))
        print(leg_id)
    elif cmd == "move-stop":
        if args.r is not None:
            position.move_stop_r(require(args.r, "r"))
        else:
            position.move_stop(require(args.price, "price"))
    elif cmd == "breakeven":
        position.set_breakeven(not args.clear, normalize(args.price))
    elif cmd == "manual-pnl":
        position.set_manual_pnl(normalize(args.value))
    store.save_position(position)
    print_position(position, config)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trade journal position manager")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--db", type=Path, default=None, help="Override storage path")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("new", help="Create a planned position")
    p.add_argument("--symbol", default=None)
    p.add_argument("--account", default=None)

    sub.add_parser("list", help="List stored positions")
    sub.add_parser("summary", help="Journal metrics over closed positions")

    p = sub.add_parser("delete", help="Delete a position and its legs")
    p.add_argument("id")

    p = sub.add_parser("show", help="Show one position")
    p.add_argument("id")
    p.add_argument("--mark", default=None, help="Current price for unrealized P&L")

    p = sub.add_parser("entry", help="Set entry (Planned -> Open)")
    p.add_argument("id")
    p.add_argument("--direction", default="long")
    p.add_argument("--entry", default=None)
    p.add_argument("--stop", default=None)
    p.add_argument("--target", default=None)
    p.add_argument("--size", default=None)

    p = sub.add_parser("scale-out", help="Close part of the position")
    p.add_argument("id")
    p.add_argument("--size", default=None)
    p.add_argument("--price", default=None)

    p = sub.add_parser("close-percent", help="Close a percentage of the remaining size")
    p.add_argument("id")
    p.add_argument("--percent", default=None)
    p.add_argument("--price", default=None)

    p = sub.add_parser("update-leg", help="Correct a scale-out leg")
    p.add_argument("id")
    p.add_argument("leg_id")
    p.add_argument("--size", default=None)
    p.add_argument("--price", default=None)

    p = sub.add_parser("remove-leg", help="Undo a scale-out leg")
    p.add_argument("id")
    p.add_argument("leg_id")

    p = sub.add_parser("close", help="Close all remaining size")
    p.add_argument("id")
    p.add_argument("--price", default=None)

    p = sub.add_parser("move-stop", help="Move the working stop to a price or an R offset")
    p.add_argument("id")
    group = p.add_mutually_exclusive_group(required=True)
    group.add_argument("--price", default=None)
    group.add_argument("--r", default=None, help="R from entry: 0 is breakeven, 0.5 locks half an R")

    p = sub.add_parser("breakeven", help="Record stop moved to breakeven")
    p.add_argument("id")
    p.add_argument("--price", default=None, help="Defaults to entry price")
    p.add_argument("--clear", action="store_true")

    p = sub.add_parser("manual-pnl", help="Set or clear (no --value) manual P&L")
    p.add_argument("id")
    p.add_argument("--value", default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file)
    store = SqlitePositionStore(args.db or config.storage_path)
    try:
        return run_command(args, config, store)
    except PositionError as e:
        logger.error("%s: %s", e.kind, e.message)
        return 1
    except ValueError as e:
        logger.error("Invalid input: %s", e)
        return 2


if __name__ == "__main__":
    exit(main())
