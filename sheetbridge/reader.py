"""Read worksheets out of workbook files.

Every public function opens its own :class:`~sheetbridge.connection.Connection`
and releases it before returning, so calls share no state and may run
concurrently from separate threads.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import pandas as pd

from .config import SheetNameRules
from .connection import WORKSHEET_DELIMITER, PathLike, open_connection
from .exceptions import (
    FILE_NOT_OPENED,
    WORKSHEET_NOT_OPENED,
    ConfigurationError,
    FileAccessError,
    WorksheetNotFoundError,
)
from .formats import FileFormat
from .workbook import Workbook, name_table

logger = logging.getLogger(__name__)


def list_sheet_names(
    file_format: FileFormat,
    path: Optional[PathLike],
    rules: Optional[SheetNameRules] = None,
) -> List[str]:
    """Return the logical worksheet names of the workbook at ``path``.

    Names come back in driver catalog order with driver-internal entries,
    auto-filter artefacts and duplicates removed.  A workbook with no
    qualifying sheets yields an empty list.
    """

    logger.info("Listing worksheets in %s", path)
    with open_connection(file_format, path) as connection:
        try:
            raw_names = connection.table_names()
        except Exception as exc:
            raise FileAccessError(FILE_NOT_OPENED) from exc
    return clean_sheet_names(raw_names, rules)


def clean_sheet_names(raw_names: Iterable[str], rules: Optional[SheetNameRules] = None) -> List[str]:
    """Apply ``rules`` to raw catalog entries, keeping catalog order."""

    rules = rules or SheetNameRules()
    accepted: List[str] = []
    for raw_name in raw_names:
        name = rules.clean(raw_name)
        reason = rules.rejection(name, accepted)
        if reason is not None:
            logger.debug("Skipping catalog entry %r: %s", raw_name, reason)
            continue
        accepted.append(name)
    return accepted


def read_sheet(file_format: FileFormat, path: Optional[PathLike], sheet_name: str) -> pd.DataFrame:
    """Return the contents of ``sheet_name`` as a table named ``sheet_name``."""

    logger.info("Reading worksheet '%s' from %s", sheet_name, path)
    with open_connection(file_format, path) as connection:
        try:
            frame = connection.select_all(f"{sheet_name}{WORKSHEET_DELIMITER}")
        except Exception as exc:
            raise WorksheetNotFoundError(WORKSHEET_NOT_OPENED) from exc
    return name_table(frame, sheet_name, path)


def read_workbook(
    file_format: FileFormat,
    path: Optional[PathLike],
    rules: Optional[SheetNameRules] = None,
) -> Workbook:
    """Read every worksheet of the workbook at ``path`` in catalog order.

    Tables are keyed by sheet name, so ``rules`` must de-duplicate names.
    """

    if rules is not None and not rules.deduplicate:
        raise ConfigurationError("read_workbook requires sheet name rules that de-duplicate names")

    logger.info("Reading workbook %s", path)
    workbook = Workbook(path=str(path))
    for sheet_name in list_sheet_names(file_format, path, rules):
        workbook.add(read_sheet(file_format, path, sheet_name))
    logger.debug("Read %d worksheet(s) from %s", len(workbook), path)
    return workbook


__all__ = ["clean_sheet_names", "list_sheet_names", "read_sheet", "read_workbook"]
