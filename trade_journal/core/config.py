"""
Load configuration from config.yaml and .env. Env values override the file.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: str = "") -> str:
        return os.getenv(key, default).strip()

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    storage = data.get("storage", {})
    display = data.get("display", {})
    logging_cfg = data.get("logging", {})

    balances: Dict[str, float] = {}
    for account_id, balance in (data.get("accounts") or {}).items():
        if balance is None:
            continue
        balances[str(account_id)] = float(balance)

    # Relative paths are relative to the project root, like config.yaml itself
    storage_path = Path(env("JOURNAL_DB_PATH", str(storage.get("path", "data/positions.sqlite3"))))
    if not storage_path.is_absolute():
        storage_path = root / storage_path
    log_dir = logging_cfg.get("log_dir")
    if log_dir and not Path(log_dir).is_absolute():
        log_dir = root / log_dir

    return Config(
        storage_path=storage_path,
        account_balances=balances,
        money_decimals=env_int("MONEY_DECIMALS", display.get("money_decimals", 2)),
        price_decimals=env_int("PRICE_DECIMALS", display.get("price_decimals", 5)),
        log_level=env("LOG_LEVEL", logging_cfg.get("level", "INFO")),
        log_dir=log_dir,
        log_file=logging_cfg.get("log_file", "trade_journal.log"),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "storage_path", "account_balances",
        "money_decimals", "price_decimals",
        "log_level", "log_dir", "log_file",
    )

    def __init__(
        self,
        storage_path: Path = None,
        account_balances: Optional[Dict[str, float]] = None,
        money_decimals: int = 2,
        price_decimals: int = 5,
        log_level: str = "INFO",
        log_dir: Optional[Path] = None,
        log_file: str = "trade_journal.log",
    ):
        self.storage_path = Path(storage_path) if storage_path else Path("data/positions.sqlite3")
        self.account_balances = dict(account_balances or {})
        self.money_decimals = money_decimals
        self.price_decimals = price_decimals
        self.log_level = log_level
        # No log_dir means console only
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_file = log_file
