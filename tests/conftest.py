"""
Shared fixtures for typesafe-object tests.

The ``typesafe`` registry mirrors the small two-type registry used
throughout the parser tests: ``int`` rounds, ``answer`` only accepts 42.
"""

from __future__ import annotations

import pytest

from typesafe_object import FieldConversionError, Registry, create_registry


def round_to_int(value):
    return round(float(value))


def answer(value):
    if value != 42:
        raise FieldConversionError("wrong answer")
    return 42


@pytest.fixture
def typesafe() -> Registry:
    return create_registry({"int": round_to_int, "answer": answer})


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (end-to-end flows)",
    )
