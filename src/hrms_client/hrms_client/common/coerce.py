"""Coalesce-to-default helpers.

Display fields coming from the API may be missing, null or malformed. Every
read of such a field goes through one of these helpers so the "never raise
for optional data" policy lives in one place.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..core.constants import PLACEHOLDER

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def dig(data: Any, *path: str, default: Any = None) -> Any:
    """Walk nested mappings; return ``default`` as soon as a hop is missing."""
    current = data
    for key in path:
        if not isinstance(current, Mapping):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def coerce_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Parse ``value`` as Decimal, falling back to ``default``.

    Behaves like a lenient float parse: ``"7.5h"`` is not a number and yields
    the default, as do ``None``, ``""`` and non-finite values.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        logger.debug("coerce_decimal: unparseable value %r", value)
        return default
    if not parsed.is_finite():
        return default
    return parsed


def coerce_int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(coerce_decimal(value, Decimal(default)))
        except (ValueError, ArithmeticError):
            return default


def coerce_str(value: Any, default: str = PLACEHOLDER) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def sum_decimals(*values: Any) -> Decimal:
    total = ZERO
    for v in values:
        total += coerce_decimal(v)
    return total


def format_money(value: Any, *, symbol: str = "₹") -> str:
    amount = coerce_decimal(value)
    return f"{symbol}{amount:,.2f}"
