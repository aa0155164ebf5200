"""Sheet Bridge core package.

This package reads worksheets out of legacy binary (``.xls``) and zipped-XML
(``.xlsx``) workbooks without the originating spreadsheet application.  File
parsing is delegated to pandas' Excel engines; the package decides which
engine a format needs, which catalog entries are real worksheets, and how
driver failures are reported.
"""

from .comparison import table_differences, tables_equal, workbooks_equal
from .config import ReaderConfig, SheetNameRules, load_config
from .connection import Connection, build_connection_string, open_connection
from .exceptions import (
    ConfigurationError,
    FileAccessError,
    SheetBridgeError,
    WorksheetNotFoundError,
)
from .formats import Dialect, FileFormat
from .reader import clean_sheet_names, list_sheet_names, read_sheet, read_workbook
from .workbook import Workbook, table_name

__all__ = [
    "ConfigurationError",
    "Connection",
    "Dialect",
    "FileAccessError",
    "FileFormat",
    "ReaderConfig",
    "SheetBridgeError",
    "SheetNameRules",
    "Workbook",
    "WorksheetNotFoundError",
    "build_connection_string",
    "clean_sheet_names",
    "list_sheet_names",
    "load_config",
    "open_connection",
    "read_sheet",
    "read_workbook",
    "table_differences",
    "table_name",
    "tables_equal",
    "workbooks_equal",
]
