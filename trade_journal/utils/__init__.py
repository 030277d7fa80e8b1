"""Utils: numeric input normalization, presentation formatting."""

from trade_journal.utils.numeric import normalize, require
from trade_journal.utils.formatting import format_money, format_signed, format_percent, format_price

__all__ = ["normalize", "require", "format_money", "format_signed", "format_percent", "format_price"]
