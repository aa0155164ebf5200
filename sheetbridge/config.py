"""Configuration loading utilities for the workbook readers."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import yaml

from .connection import WORKSHEET_DELIMITER
from .exceptions import ConfigurationError


@dataclass
class SheetNameRules:
    """Rules turning raw driver catalog entries into logical sheet names.

    Driver versions differ in how they name internal objects, so the
    exclusions are data rather than code.  The defaults drop names starting
    or ending with an underscore (driver-internal ranges) and Excel
    auto-filter artefacts ending in ``FilterDatabase``.
    """

    delimiter: str = WORKSHEET_DELIMITER
    exclude_prefixes: Tuple[str, ...] = ("_",)
    exclude_suffixes: Tuple[str, ...] = ("_", "FilterDatabase")
    deduplicate: bool = True

    def __post_init__(self) -> None:
        self.exclude_prefixes = tuple(self.exclude_prefixes)
        self.exclude_suffixes = tuple(self.exclude_suffixes)

    def clean(self, raw_name: Any) -> str:
        """Strip the trailing delimiter and surrounding whitespace."""

        name = "" if raw_name is None else str(raw_name).strip()
        if self.delimiter and name.endswith(self.delimiter):
            name = name[: -len(self.delimiter)]
        return name.strip()

    def rejection(self, name: str, accepted: Sequence[str]) -> Optional[str]:
        """Return why ``name`` is excluded, or ``None`` when it is kept."""

        if not name:
            return "empty name"
        for prefix in self.exclude_prefixes:
            if prefix and name.startswith(prefix):
                return f"starts with '{prefix}'"
        for suffix in self.exclude_suffixes:
            if suffix and name.endswith(suffix):
                return f"ends with '{suffix}'"
        if self.deduplicate and name in accepted:
            return "duplicate"
        return None


@dataclass
class ReaderConfig:
    """Container for all reader configuration."""

    sheet_names: SheetNameRules = field(default_factory=SheetNameRules)


def load_config(path: Union[str, Path]) -> ReaderConfig:
    """Load :class:`ReaderConfig` from a YAML file."""

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file '{config_path}' does not exist")

    with config_path.open("r", encoding="utf-8") as stream:
        try:
            raw_config = yaml.safe_load(stream) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Configuration file '{config_path}' is not valid YAML") from exc

    if not isinstance(raw_config, Mapping):
        raise ConfigurationError("Configuration must be a mapping of sections")

    unknown = sorted(set(raw_config) - {"sheet_names"})
    if unknown:
        raise ConfigurationError(f"Unknown configuration sections: {', '.join(unknown)}")

    return ReaderConfig(sheet_names=_parse_sheet_name_rules(raw_config.get("sheet_names") or {}))


def _parse_sheet_name_rules(section: Any) -> SheetNameRules:
    if not isinstance(section, Mapping):
        raise ConfigurationError("'sheet_names' must be a mapping")

    allowed = {field_info.name for field_info in fields(SheetNameRules)}
    unknown = sorted(set(section) - allowed)
    if unknown:
        raise ConfigurationError(f"Unknown 'sheet_names' options: {', '.join(unknown)}")

    parsed: Dict[str, Any] = {}
    if "delimiter" in section:
        delimiter = section["delimiter"]
        parsed["delimiter"] = "" if delimiter is None else str(delimiter)
    for key in ("exclude_prefixes", "exclude_suffixes"):
        if key in section:
            parsed[key] = tuple(_parse_string_list(key, section[key]))
    if "deduplicate" in section:
        if not isinstance(section["deduplicate"], bool):
            raise ConfigurationError("'sheet_names.deduplicate' must be true or false")
        parsed["deduplicate"] = section["deduplicate"]
    return SheetNameRules(**parsed)


def _parse_string_list(key: str, value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"'sheet_names.{key}' must be a list of strings")
    return [str(item) for item in value]


__all__ = ["ReaderConfig", "SheetNameRules", "load_config"]
