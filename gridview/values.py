"""Conversion of editor-supplied setting values into typed Python values.

Each parser takes the setting's current value and a decoded message value.
It returns the converted value, or logs an error and returns the current
value unchanged when the incoming value has the wrong type.
"""

from __future__ import annotations

import logging
import math
import struct
from typing import Any

logger = logging.getLogger(__name__)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MAX = 2**64 - 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_i64(value: Any) -> bool:
    return _is_int(value) and _I64_MIN <= value <= _I64_MAX


def _is_u64(value: Any) -> bool:
    return _is_int(value) and 0 <= value <= _U64_MAX


def _to_f32(number: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def _wrap_signed(number: int, bits: int) -> int:
    mask = (1 << bits) - 1
    number &= mask
    return number - (1 << bits) if number >> (bits - 1) else number


def parse_f32(current: float, value: Any) -> float:
    """Accept a float or any 64-bit integer, rounded to single precision."""
    if isinstance(value, float):
        return _to_f32(value)
    if _is_i64(value) or _is_u64(value):
        return _to_f32(float(value))
    logger.error("Setting expected an f32, but received %r", value)
    return current


def parse_u64(current: int, value: Any) -> int:
    """Accept a non-negative 64-bit integer."""
    if _is_u64(value):
        return value
    logger.error("Setting expected a u64, but received %r", value)
    return current


def parse_u32(current: int, value: Any) -> int:
    """Accept a non-negative 64-bit integer, truncated to 32 bits."""
    if _is_u64(value):
        return value & 0xFFFFFFFF
    logger.error("Setting expected a u32, but received %r", value)
    return current


def parse_i32(current: int, value: Any) -> int:
    """Accept a signed 64-bit integer, truncated to a signed 32-bit value."""
    if _is_i64(value):
        return _wrap_signed(value, 32)
    logger.error("Setting expected an i32, but received %r", value)
    return current


def parse_str(current: str, value: Any) -> str:
    """Accept a string."""
    if isinstance(value, str):
        return value
    logger.error("Setting expected a string, but received %r", value)
    return current


def parse_bool(current: bool, value: Any) -> bool:
    """Accept a boolean, or a non-negative integer meaning true when non-zero."""
    if isinstance(value, bool):
        return value
    if _is_u64(value):
        return value != 0
    logger.error("Setting expected a bool or 0/1, but received %r", value)
    return current