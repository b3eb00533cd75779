import logging
import math
import re
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


def clean_value(value: Union[str, float, int, None]) -> float:
    """
    Clean and convert a value to float.
    Removes commas from strings and strips whitespace.
    Returns 0.0 if conversion fails.
    """
    try:
        if isinstance(value, str):
            value = value.replace(',', '').strip()
        if value is None or value == '':
            return 0.0
        result = float(value)
        return 0.0 if math.isnan(result) else result
    except (ValueError, TypeError):
        logger.debug(f"Could not clean value: {value}")
        return 0.0


def clean_amount(value: Any) -> float:
    """
    Parse an uploaded amount cell.
    Non-strings are coerced directly; strings lose every character except digits, '.' and '-'.
    """
    if not isinstance(value, str):
        return clean_value(value)
    cleaned = re.sub(r'[^0-9.\-]', '', value)
    return clean_value(cleaned)


def to_lakhs(value: Union[float, int, str]) -> float:
    """
    Convert a numeric value to lakhs (divide by 100,000 and round to 2 decimals).
    Accepts int, float, or numeric string.
    """
    try:
        if isinstance(value, str):
            value = float(value.replace(',', '').strip())
        return round(float(value) / 100000, 2)
    except (ValueError, TypeError):
        logger.debug(f"Could not convert to lakhs: {value}")
        return 0.0


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: Optional[float]) -> str:
    """Indian digit grouping, two decimals, negatives in parentheses, blank for missing values."""
    if amount is None:
        return ''
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return ''
    if math.isnan(value):
        return ''
    whole, fraction = f"{abs(value):.2f}".split('.')
    formatted = f"{_group_indian(whole)}.{fraction}"
    return f"({formatted})" if value < 0 else formatted
