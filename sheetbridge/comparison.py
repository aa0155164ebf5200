"""Helpers for comparing tables and workbooks read from different files."""

from __future__ import annotations

from typing import Any, List

import pandas as pd

from .workbook import Workbook, table_name

MAX_REPORTED_CELLS = 10


def table_differences(expected: pd.DataFrame, actual: pd.DataFrame, check_name: bool = False) -> List[str]:
    """Describe how ``actual`` differs from ``expected``.

    Columns are compared by name and order, rows by position, and cells by
    value with missing values (``None``/``NaN``/``NaT``) treated as equal.
    """

    differences: List[str] = []
    if check_name and table_name(expected) != table_name(actual):
        differences.append(f"table name {table_name(expected)!r} != {table_name(actual)!r}")

    expected_columns = [str(column) for column in expected.columns]
    actual_columns = [str(column) for column in actual.columns]
    if expected_columns != actual_columns:
        differences.append(f"columns {expected_columns} != {actual_columns}")
        return differences

    if len(expected) != len(actual):
        differences.append(f"row count {len(expected)} != {len(actual)}")
        return differences

    reported = 0
    for position in range(len(expected.columns)):
        left = expected.iloc[:, position].tolist()
        right = actual.iloc[:, position].tolist()
        for row, (left_value, right_value) in enumerate(zip(left, right)):
            if _values_equal(left_value, right_value):
                continue
            differences.append(
                f"row {row}, column {expected_columns[position]!r}: {left_value!r} != {right_value!r}"
            )
            reported += 1
            if reported >= MAX_REPORTED_CELLS:
                return differences
    return differences


def tables_equal(expected: pd.DataFrame, actual: pd.DataFrame, check_name: bool = False) -> bool:
    return not table_differences(expected, actual, check_name=check_name)


def workbooks_equal(expected: Workbook, actual: Workbook) -> bool:
    if expected.sheet_names != actual.sheet_names:
        return False
    return all(
        tables_equal(left, right, check_name=True)
        for left, right in zip(expected.tables, actual.tables)
    )


def _values_equal(left: Any, right: Any) -> bool:
    left_missing = _is_missing(left)
    right_missing = _is_missing(right)
    if left_missing or right_missing:
        return left_missing and right_missing
    return bool(left == right)


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


__all__ = ["table_differences", "tables_equal", "workbooks_equal"]
