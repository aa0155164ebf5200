"""Supported workbook container formats and the driver dialects they select."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union


class FileFormat(Enum):
    """Workbook container format supplied by the caller on every read."""

    LEGACY_BINARY = "xls"
    OPEN_XML = "xlsx"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileFormat":
        """Infer the format tag from a file suffix."""

        suffix = Path(path).suffix.lower()
        try:
            return _SUFFIXES[suffix]
        except KeyError:
            raise ValueError(f"Unsupported workbook extension '{suffix}' for '{path}'") from None

    @property
    def dialect(self) -> "Dialect":
        return DIALECTS[self]


@dataclass(frozen=True)
class Dialect:
    """Driver settings used to open one workbook format.

    ``engine`` is the pandas Excel engine that parses the container,
    ``version`` is the container revision reported in the connection string,
    ``header`` marks the first row as column names and ``mixed_types_as_text``
    enables mixed-type inference (columns mixing value kinds come back as
    text).
    """

    engine: str
    provider: str
    version: str
    header: bool = True
    mixed_types_as_text: bool = False

    def extended_properties(self) -> str:
        parts = [self.version, f"HDR={'YES' if self.header else 'NO'}"]
        if self.mixed_types_as_text:
            parts.append("IMEX=1")
        return ";".join(parts) + ";"

    def connection_string(self, path: Union[str, Path]) -> str:
        return (
            f"Provider={self.provider};Data Source={path};"
            f'Extended Properties="{self.extended_properties()}"'
        )

    @property
    def header_row(self) -> Optional[int]:
        return 0 if self.header else None


DIALECTS: Dict[FileFormat, Dialect] = {
    FileFormat.LEGACY_BINARY: Dialect(
        engine="xlrd",
        provider="pandas.xlrd",
        version="Excel 8.0",
        mixed_types_as_text=True,
    ),
    FileFormat.OPEN_XML: Dialect(
        engine="openpyxl",
        provider="pandas.openpyxl",
        version="Excel 12.0 Xml",
    ),
}

_SUFFIXES: Dict[str, FileFormat] = {
    ".xls": FileFormat.LEGACY_BINARY,
    ".xlsx": FileFormat.OPEN_XML,
    ".xlsm": FileFormat.OPEN_XML,
}


__all__ = ["DIALECTS", "Dialect", "FileFormat"]
