"""
Built-in field types.

Ready-made conversion functions for the common cases, bundled as
``DEFAULT_FIELD_TYPES``. Every function takes one raw value and either
returns the converted value or raises ``FieldConversionError``.

Numeric strings are cleaned before parsing:
1. Strip leading/trailing whitespace.
2. Remove comma thousand separators (e.g., "25,200").
3. Parse as ``int`` when the value is integral, otherwise ``float``.

NaN and infinities are rejected everywhere.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from typesafe_object.exceptions import FieldConversionError
from typesafe_object.outcome import MISSING
from typesafe_object.registry import Registry, create_registry

_TRUE_STRINGS = frozenset({"true", "yes", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "0"})


def any_value(value: Any) -> Any:
    return value


def string(value: Any) -> str:
    if value is MISSING:
        raise FieldConversionError("is required")
    return str(value)


def capitalized_string(value: Any) -> str:
    return string(value).upper()


def _check_finite(value: int | float) -> int | float:
    if isinstance(value, float) and not math.isfinite(value):
        raise FieldConversionError("not a finite number")
    return value


def number(value: Any) -> int | float:
    """Accept ints and finite floats as-is; parse numeric strings.

    ``bool`` is rejected even though it subclasses ``int``. Strings
    holding an integral value (``"1.0"``) become ``int``.
    """
    if isinstance(value, bool):
        raise FieldConversionError("not a number!")
    if isinstance(value, (int, float)):
        return _check_finite(value)
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        try:
            return int(cleaned)
        except ValueError:
            pass
        try:
            parsed = _check_finite(float(cleaned))
        except ValueError:
            raise FieldConversionError("not a number!") from None
        return int(parsed) if parsed.is_integer() else parsed
    raise FieldConversionError("not a number!")


def rounded_integer(value: Any) -> int:
    """Parse a number and round it, halves going up (2.5 -> 3, -2.5 -> -2)."""
    parsed = number(value)
    if isinstance(parsed, int):
        return parsed
    return math.floor(parsed + 0.5)


def positive_number(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FieldConversionError("not a number!")
    _check_finite(value)
    if value <= 0:
        raise FieldConversionError("must be greater than zero")
    return value


def boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise FieldConversionError("not a boolean")


def optional(fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Wrap ``fn`` so that ``MISSING`` and ``None`` pass through unconverted."""

    def convert(value: Any) -> Any:
        if value is MISSING or value is None:
            return value
        return fn(value)

    convert.__name__ = f"optional({getattr(fn, '__name__', type(fn).__name__)})"
    return convert


DEFAULT_FIELD_TYPES: dict[str, Callable[[Any], Any]] = {
    "any_value": any_value,
    "string": string,
    "capitalized_string": capitalized_string,
    "number": number,
    "rounded_integer": rounded_integer,
    "positive_number": positive_number,
    "boolean": boolean,
}


def default_registry() -> Registry:
    """Registry pre-loaded with ``DEFAULT_FIELD_TYPES``."""
    return create_registry(DEFAULT_FIELD_TYPES)
