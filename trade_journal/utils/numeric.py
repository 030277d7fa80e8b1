"""Form-input normalization: strings in, finite floats or None out."""

from __future__ import annotations
import math
from typing import Optional, Union

from trade_journal.core.errors import MissingRequiredField

Raw = Union[str, int, float, None]


def normalize(raw: Raw) -> Optional[float]:
    """
    Parse a user-supplied value into a float.
    Returns None for None, empty/blank strings, unparsable text and non-finite values
    ('inf', 'nan'). None means "value absent", not an error.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        # float() accepts digit separators, form inputs do not
        if not text or "_" in text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    return value


def require(raw: Raw, field_name: str) -> float:
    """Normalize and raise MissingRequiredField when the value is absent."""
    value = normalize(raw)
    if value is None:
        raise MissingRequiredField(f"{field_name} is required")
    return value
