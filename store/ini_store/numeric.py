"""
Strict numeric parsing for stored string values.

Only complete numerals are accepted: no surrounding whitespace, no leading
``+``, no digit separators. ``int("  12")`` would succeed, ``parse_number``
does not.
"""

from __future__ import annotations
import math
import re
from typing import Optional, Type, Union

Number = Union[int, float]

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_FLOAT_SPECIAL_RE = re.compile(r"-?(?:inf(?:inity)?|nan)", re.IGNORECASE)


def check_number_type(number_type: Type[Number]) -> None:
    if number_type is bool or number_type not in (int, float):
        raise TypeError(f"number_type must be int or float, got {number_type!r}")


def parse_number(text: str, number_type: Type[Number] = int) -> Optional[Number]:
    """
    Parse `text` as `number_type` (int or float).

    Returns None when `text` is not exactly one valid numeral of that type,
    including finite float literals that overflow to infinity.

    Raises:
        TypeError: `number_type` is not int or float.
    """
    check_number_type(number_type)

    if number_type is int:
        if _INT_RE.fullmatch(text) is None:
            return None
        return int(text)

    if _FLOAT_SPECIAL_RE.fullmatch(text):
        return float(text)
    if _FLOAT_RE.fullmatch(text) is None:
        return None
    value = float(text)
    if math.isinf(value):
        return None
    return value
