"""
Success/failure values exchanged between field types and the parse loop.

- ``MISSING`` marks an absent value. It is what a field type receives
  when the input has no such key, and what it returns to leave the key
  out of the result. ``None`` is an ordinary value and is kept.
- ``Failure`` lets a field type reject a value without raising.
- ``Outcome`` is what every resolved field hands back to the parser. A
  field type may also return one directly; it is used as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class _MissingType:
    """Singleton type of the ``MISSING`` sentinel."""

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _MissingType()


@dataclass(frozen=True)
class Failure:
    """Explicit rejection returned by a field type instead of a value."""
    message: str


@dataclass(frozen=True)
class Outcome:
    """Result of converting one raw field value.

    Attributes:
        value: The produced value, or ``MISSING`` to omit the key.
        error: Failure message; ``None`` on success.
    """
    value: Any = MISSING
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> Outcome:
        return cls(value=value)

    @classmethod
    def failure(cls, message: str) -> Outcome:
        return cls(error=message)
