"""Presentation helpers. Rounding happens here and nowhere in the calculators."""

from __future__ import annotations
import math
from typing import Optional

PLACEHOLDER = "--"


def _missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and not math.isfinite(value))


def format_money(value: Optional[float], decimals: int = 2) -> str:
    """Fixed decimals, '--' when absent."""
    if _missing(value):
        return PLACEHOLDER
    return f"{value:.{decimals}f}"


def format_signed(value: Optional[float], decimals: int = 2) -> str:
    """Money with an explicit sign: '+12.50', '-3.00', '0.00'."""
    if _missing(value):
        return PLACEHOLDER
    text = f"{value:.{decimals}f}"
    # -0.00 after rounding is still zero
    if float(text) == 0:
        return f"{0:.{decimals}f}"
    return text if value < 0 else f"+{text}"


def format_percent(value: Optional[float], decimals: int = 2) -> str:
    """'12.50%' or '--'."""
    if _missing(value):
        return PLACEHOLDER
    return f"{value:.{decimals}f}%"


def format_price(value: Optional[float], decimals: int = 5) -> str:
    """Prices keep more decimals than money (FX quotes)."""
    if _missing(value):
        return PLACEHOLDER
    return f"{value:.{decimals}f}"
