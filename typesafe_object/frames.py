"""
Batch parsing of tabular records.

Runs an ``ObjectParser`` over every row of a DataFrame. Rows are parsed
independently: a failing row is recorded under its index label and the
remaining rows are still converted.

Missing cells (``NaN``, ``None``, ``NaT``) are handed to field types as
``MISSING``, so a blank cell behaves like an absent key rather than a
float ``nan``.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from typesafe_object.exceptions import AggregateParseError
from typesafe_object.outcome import MISSING
from typesafe_object.parser import ObjectParser

logger = logging.getLogger(__name__)


@dataclass
class FrameParseResult:
    """Output of ``parse_frame()``.

    Attributes:
        records: Parsed dicts for the rows that succeeded, in row order.
        index: Index labels of those rows, aligned with ``records``.
        errors: ``(index label, message)`` for each failed row, in row
            order. A list rather than a dict so rows sharing an index label
            are all kept.
    """

    records: list[dict[str, Any]] = field(default_factory=list)
    index: list[Hashable] = field(default_factory=list)
    errors: list[tuple[Hashable, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def rows_total(self) -> int:
        return len(self.records) + len(self.errors)

    @property
    def rows_failed(self) -> int:
        return len(self.errors)

    def to_frame(self) -> pd.DataFrame:
        """Successful records as a DataFrame keyed by their original index."""
        return pd.DataFrame.from_records(self.records, index=pd.Index(self.index))


def _cell(value: Any) -> Any:
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return MISSING
    return value


def parse_frame(parser: ObjectParser[Any], df: pd.DataFrame) -> FrameParseResult:
    """Parse every row of ``df`` with ``parser``.

    Only ``AggregateParseError`` is collected per row; anything else
    propagates.

    Args:
        parser: The parser to apply to each row.
        df: Input table; column names are used as input keys.

    Returns:
        FrameParseResult with successful records and per-row errors.
    """
    result = FrameParseResult()
    columns = [str(c) for c in df.columns]
    for label, row in zip(df.index, df.itertuples(index=False, name=None)):
        record = {col: _cell(v) for col, v in zip(columns, row)}
        try:
            parsed = parser.parse(record)
        except AggregateParseError as e:
            logger.debug("Row %r failed: %s", label, e)
            result.errors.append((label, str(e)))
            continue
        result.records.append(parsed)
        result.index.append(label)

    logger.info(
        "Parsed %d row(s) with %s: %d ok, %d failed",
        result.rows_total,
        parser.name,
        len(result.records),
        result.rows_failed,
    )
    return result
