"""Pick the columns of a query result worth drawing as a bar chart."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

import pandas as pd

from datasage.model import QueryResult


class ChartColumns(NamedTuple):
    label: Optional[str]  # None -> use the row position
    value: str


def _is_number(cell: str) -> bool:
    try:
        return math.isfinite(float(cell.strip()))
    except ValueError:
        return False


def _is_numeric_column(result: QueryResult, index: int) -> bool:
    return all(index < len(row) and _is_number(row[index]) for row in result.rows)


def pick_chart_columns(result: Optional[QueryResult]) -> Optional[ChartColumns]:
    """
    The first all-numeric column is charted against the first non-numeric one.

    Returns None when there is nothing to chart.
    """
    if result is None or not result.rows:
        return None

    numeric = [_is_numeric_column(result, i) for i in range(len(result.columns))]
    if not any(numeric):
        return None

    value = result.columns[numeric.index(True)]
    label = next((c for c, is_num in zip(result.columns, numeric) if not is_num), None)
    return ChartColumns(label=label, value=value)


def to_frame(result: QueryResult) -> pd.DataFrame:
    return pd.DataFrame(result.rows, columns=result.columns)


def chart_frame(result: QueryResult, columns: ChartColumns) -> pd.DataFrame:
    """Two-column frame (label, numeric value) ready for a bar chart."""
    df = to_frame(result)
    label = columns.label
    if label is None:
        label = "Row"
        df[label] = [str(i + 1) for i in range(len(df))]
    out = df[[label, columns.value]].copy()
    out[columns.value] = pd.to_numeric(out[columns.value], errors="coerce")
    return out
