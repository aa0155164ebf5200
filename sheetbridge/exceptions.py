"""Exceptions raised by the workbook readers."""

from __future__ import annotations

FILE_NOT_SPECIFIED = "Unable to open the specified file"
FILE_NOT_OPENED = (
    "Unable to open the specified file - NOTE that 32-bit driver support "
    "must be enabled on a 64-bit host"
)
WORKSHEET_NOT_OPENED = "Unable to open the specified worksheet"


class SheetBridgeError(Exception):
    """Base class for every error surfaced by :mod:`sheetbridge`."""


class FileAccessError(SheetBridgeError):
    """The workbook path was missing or the driver could not open it."""


class WorksheetNotFoundError(SheetBridgeError):
    """The workbook opened but the requested worksheet could not be queried."""


class ConfigurationError(SheetBridgeError, ValueError):
    """A reader configuration file is malformed."""


__all__ = [
    "ConfigurationError",
    "FILE_NOT_OPENED",
    "FILE_NOT_SPECIFIED",
    "FileAccessError",
    "SheetBridgeError",
    "WORKSHEET_NOT_OPENED",
    "WorksheetNotFoundError",
]
