"""Driver sessions for workbook files.

A :class:`Connection` wraps one open :class:`pandas.ExcelFile` and exposes the
two things the readers need from the driver: the catalog of tabular objects in
the file and a full-table query against one worksheet.  Nothing outside this
module talks to pandas' Excel engines directly.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime, time, timedelta
from pathlib import Path, PurePath
from typing import Any, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .exceptions import FILE_NOT_OPENED, FILE_NOT_SPECIFIED, FileAccessError
from .formats import Dialect, FileFormat

logger = logging.getLogger(__name__)

WORKSHEET_DELIMITER = "$"
BUILTIN_NAME_PREFIX = "_xlnm."

PathLike = Union[str, "os.PathLike[str]"]


class Connection:
    """Open driver session for a single workbook file."""

    def __init__(
        self,
        excel: pd.ExcelFile,
        file_format: FileFormat,
        path: PathLike,
        connection_string: str,
    ) -> None:
        self._excel = excel
        self.file_format = file_format
        self.path = path
        self.connection_string = connection_string
        self._closed = False

    @property
    def dialect(self) -> Dialect:
        return self.file_format.dialect

    @property
    def closed(self) -> bool:
        return self._closed

    def table_names(self) -> List[str]:
        """Return the raw driver catalog.

        Worksheets are reported as ``"<title>$"`` in workbook order, followed
        by hidden built-in names such as auto-filter ranges.  Sheet-scoped
        names are reported as ``"<title>$<name>"``.  Ordinary defined names,
        hidden or not, are not worksheets and are left out.
        """

        self._ensure_open()
        catalog = [f"{title}{WORKSHEET_DELIMITER}" for title in self._excel.sheet_names]
        catalog.extend(_builtin_names(_book(self._excel), self.dialect.engine))
        logger.debug("Catalog for %s: %s", self.path, catalog)
        return catalog

    def select_all(self, table: str) -> pd.DataFrame:
        """Return every row and column of the worksheet referenced by ``table``."""

        self._ensure_open()
        if not table.endswith(WORKSHEET_DELIMITER):
            raise ValueError(f"'{table}' is not a worksheet reference")
        sheet_name = table[: -len(WORKSHEET_DELIMITER)]
        if sheet_name not in self._excel.sheet_names:
            raise ValueError(f"Worksheet named '{sheet_name}' not found")

        frame = self._excel.parse(sheet_name=sheet_name, header=self.dialect.header_row)
        if self.dialect.mixed_types_as_text:
            frame = coerce_mixed_columns(frame)
        return frame

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._excel.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<Connection {self.connection_string!r} ({state})>"

    def _ensure_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed connection")


def build_connection_string(file_format: FileFormat, path: PathLike) -> str:
    """Render the dialect selected by ``file_format`` for ``path``."""

    return FileFormat(file_format).dialect.connection_string(os.fspath(path))


def open_connection(file_format: FileFormat, path: Optional[PathLike]) -> Connection:
    """Open a driver session for the workbook at ``path``.

    The file is opened immediately, so a missing driver, a missing or locked
    file and non-spreadsheet content all fail here rather than on first use.
    """

    if _is_blank(path):
        raise FileAccessError(FILE_NOT_SPECIFIED)

    file_format = FileFormat(file_format)
    connection_string = build_connection_string(file_format, path)
    logger.debug("Opening connection %s", connection_string)
    try:
        excel = _open_excel_file(path, file_format.dialect.engine)
    except Exception as exc:
        raise FileAccessError(FILE_NOT_OPENED) from exc
    return Connection(excel, file_format, path, connection_string)


def _is_blank(path: Optional[PathLike]) -> bool:
    if path is None:
        return True
    if isinstance(path, PurePath):
        return not path.parts
    return not os.fspath(path)


def _open_excel_file(path: PathLike, engine: str) -> pd.ExcelFile:
    return pd.ExcelFile(Path(path), engine=engine)


def _book(excel: pd.ExcelFile) -> Any:
    return getattr(excel, "book", None)


def _builtin_names(book: Any, engine: str) -> List[str]:
    if book is None:
        return []
    if engine == "xlrd":
        return _xlrd_builtin_names(book)
    return _openpyxl_builtin_names(book)


def _xlrd_builtin_names(book: Any) -> List[str]:
    titles = book.sheet_names()
    entries: List[str] = []
    for name in getattr(book, "name_obj_list", []):
        if not (getattr(name, "builtin", 0) and name.hidden):
            continue
        label = _strip_builtin_prefix(name.name)
        if 0 <= name.scope < len(titles):
            entries.append(f"{titles[name.scope]}{WORKSHEET_DELIMITER}{label}")
        else:
            entries.append(label)
    return entries


def _openpyxl_builtin_names(book: Any) -> List[str]:
    entries: List[str] = []
    for worksheet in book.worksheets:
        for defined in _defined_names(getattr(worksheet, "defined_names", None)):
            if _is_hidden_builtin(defined):
                label = _strip_builtin_prefix(defined.name)
                entries.append(f"{worksheet.title}{WORKSHEET_DELIMITER}{label}")
    for defined in _defined_names(getattr(book, "defined_names", None)):
        if _is_hidden_builtin(defined):
            entries.append(_strip_builtin_prefix(defined.name))
    return entries


def _is_hidden_builtin(defined: Any) -> bool:
    return bool(getattr(defined, "hidden", False)) and str(defined.name).startswith(BUILTIN_NAME_PREFIX)


def _defined_names(container: Any) -> Iterable[Any]:
    if container is None:
        return []
    if hasattr(container, "values"):
        return list(container.values())
    return list(container)


def _strip_builtin_prefix(name: str) -> str:
    if name.startswith(BUILTIN_NAME_PREFIX):
        return name[len(BUILTIN_NAME_PREFIX) :]
    return name


def coerce_mixed_columns(frame: pd.DataFrame) -> pd.DataFrame:
    """Return ``frame`` with mixed-kind object columns converted to text."""

    result = frame.copy()
    for column in result.columns:
        series = result[column]
        if series.dtype != object:
            continue
        present = series.dropna()
        kinds = {_value_kind(value) for value in present}
        if len(kinds) > 1:
            result[column] = series.map(lambda value: value if pd.isna(value) else str(value))
    return result


def _value_kind(value: Any) -> str:
    if isinstance(value, (bool, np.bool_)):
        return "boolean"
    if isinstance(value, (int, float, np.number)):
        return "number"
    if isinstance(value, (datetime, date, time, timedelta, pd.Timestamp)):
        return "datetime"
    return "text"


__all__ = [
    "Connection",
    "WORKSHEET_DELIMITER",
    "build_connection_string",
    "coerce_mixed_columns",
    "open_connection",
]
