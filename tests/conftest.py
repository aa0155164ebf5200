from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence
import sys

import pandas as pd
import pytest
from openpyxl import Workbook as OpenpyxlWorkbook

# Ensure project root is on sys.path for absolute imports
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from sheetbridge import connection as connection_module


SHEET1_ROWS: List[Sequence[object]] = [
    ("id", "name", "amount"),
    (1, "alpha", 10.5),
    (2, "beta", 20.25),
    (3, "gamma", 30.75),
]

MANY_SHEETS: Dict[str, List[Sequence[object]]] = {
    "first": [("code", "description"), ("A-1", "Concrete"), ("A-2", "Rebar")],
    "second": [("code", "quantity"), ("B-1", 4), ("B-2", 8), ("B-3", 16)],
    "third": [("label", "active"), ("x", True), ("y", False)],
}


def write_xlsx(path: Path, sheets: Dict[str, List[Sequence[object]]]) -> Path:
    workbook = OpenpyxlWorkbook()
    workbook.remove(workbook.active)
    for title, rows in sheets.items():
        worksheet = workbook.create_sheet(title)
        for row in rows:
            worksheet.append(list(row))
    workbook.save(path)
    return path


@pytest.fixture
def single_sheet_xlsx(tmp_path: Path) -> Path:
    return write_xlsx(tmp_path / "xls1.xlsx", {"Sheet1": SHEET1_ROWS})


@pytest.fixture
def many_sheets_xlsx(tmp_path: Path) -> Path:
    return write_xlsx(tmp_path / "xls2.xlsx", MANY_SHEETS)


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "TextFile1.txt"
    path.write_text("This is not a workbook.\n", encoding="utf-8")
    return path


class FakeName:
    """Defined name as reported by xlrd's ``Book.name_obj_list``."""

    def __init__(self, name: str, scope: int = -1, hidden: bool = True, builtin: bool = False) -> None:
        self.name = name
        self.scope = scope
        self.hidden = hidden
        self.builtin = builtin


class FakeBook:
    """Book exposing both the xlrd and the openpyxl name tables."""

    def __init__(self, titles: Sequence[str], names: Sequence[FakeName]) -> None:
        self._titles = list(titles)
        self.name_obj_list = list(names)
        self.worksheets: List[object] = []
        self.defined_names: Dict[str, object] = {}

    def sheet_names(self) -> List[str]:
        return list(self._titles)


class FakeExcelFile:
    """Stand-in for :class:`pandas.ExcelFile` serving in-memory frames."""

    def __init__(
        self,
        sheets: Dict[str, pd.DataFrame],
        names: Sequence[FakeName] = (),
        titles: Optional[Sequence[str]] = None,
        fail_catalog: bool = False,
        fail_parse: bool = False,
    ) -> None:
        self._sheets = sheets
        self._titles = list(titles) if titles is not None else list(sheets)
        self.book = FakeBook(self._titles, names)
        self.fail_catalog = fail_catalog
        self.fail_parse = fail_parse
        self.closed = False
        self.parsed: List[str] = []

    @property
    def sheet_names(self) -> List[str]:
        if self.fail_catalog:
            raise OSError("catalog unavailable")
        return list(self._titles)

    def parse(self, sheet_name: str, header: Optional[int] = 0) -> pd.DataFrame:
        if self.fail_parse:
            raise OSError("read error")
        self.parsed.append(sheet_name)
        return self._sheets[sheet_name].copy()

    def close(self) -> None:
        self.closed = True


class FakeDriver:
    """Registry of fake workbooks keyed by path.

    Paths that were never registered are opened with ``fallback``.
    """

    def __init__(self, fallback) -> None:
        self.fallback = fallback
        self.files: Dict[str, FakeExcelFile] = {}
        self.opened: List[FakeExcelFile] = []
        self.engines: List[str] = []

    def register(self, path: str, excel: FakeExcelFile) -> str:
        self.files[path] = excel
        return path

    def open(self, path, engine: str) -> FakeExcelFile:
        self.engines.append(engine)
        excel = self.files.get(str(path))
        if excel is None:
            excel = self.fallback(path, engine)
        self.opened.append(excel)
        return excel


@pytest.fixture
def fake_driver(monkeypatch: pytest.MonkeyPatch) -> FakeDriver:
    driver = FakeDriver(connection_module._open_excel_file)
    monkeypatch.setattr(connection_module, "_open_excel_file", driver.open)
    return driver
