"""In-memory tables and workbooks produced by the readers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

import pandas as pd

SHEET_NAME_ATTR = "sheet_name"
SOURCE_PATH_ATTR = "source_path"


def name_table(frame: pd.DataFrame, sheet_name: str, source_path: Union[str, Path, None] = None) -> pd.DataFrame:
    """Attach worksheet provenance to ``frame`` via ``DataFrame.attrs``."""

    frame.attrs[SHEET_NAME_ATTR] = sheet_name
    if source_path is not None:
        frame.attrs[SOURCE_PATH_ATTR] = str(source_path)
    return frame


def table_name(frame: pd.DataFrame) -> Optional[str]:
    return frame.attrs.get(SHEET_NAME_ATTR)


@dataclass
class Workbook:
    """Ordered, name-preserving collection of worksheet tables."""

    path: str
    sheets: Dict[str, pd.DataFrame] = field(default_factory=dict)

    def add(self, frame: pd.DataFrame) -> None:
        name = table_name(frame)
        if name is None:
            raise ValueError("Table has no sheet name")
        if name in self.sheets:
            raise ValueError(f"Workbook already contains a table named '{name}'")
        self.sheets[name] = frame

    @property
    def sheet_names(self) -> List[str]:
        return list(self.sheets)

    @property
    def tables(self) -> List[pd.DataFrame]:
        return list(self.sheets.values())

    def __len__(self) -> int:
        return len(self.sheets)

    def __iter__(self) -> Iterator[pd.DataFrame]:
        return iter(self.sheets.values())

    def __contains__(self, name: object) -> bool:
        return name in self.sheets

    def __getitem__(self, key: Union[int, str]) -> pd.DataFrame:
        if isinstance(key, int):
            return self.tables[key]
        return self.sheets[key]


__all__ = ["Workbook", "name_table", "table_name"]
