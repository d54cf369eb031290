"""YAML-backed settings store and the settings wire format."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from styleguard.errors import SettingWriteError, SettingsFormatError
from styleguard.models import (
    ALL_OTHER_IMPORTS,
    ALL_OTHER_STATIC_IMPORTS,
    BLANK_LINE,
    MODULE_IMPORTS,
    ImportsOnPaste,
    LayoutSegment,
    PackageGroup,
)
from styleguard.settings import keys
from styleguard.settings.provider import InMemorySettingsProvider

logger = logging.getLogger(__name__)

_NAMED_SEGMENTS: dict[str, LayoutSegment] = {
    "module_imports": MODULE_IMPORTS,
    "blank_line": BLANK_LINE,
    "all_other_imports": ALL_OTHER_IMPORTS,
    "all_other_static_imports": ALL_OTHER_STATIC_IMPORTS,
}
_SEGMENT_NAMES = {segment: name for name, segment in _NAMED_SEGMENTS.items()}


def segment_to_data(segment: LayoutSegment) -> str | dict[str, Any]:
    if isinstance(segment, PackageGroup):
        return {
            "package": segment.package,
            "with_subpackages": segment.with_subpackages,
            "static": segment.static,
        }
    return _SEGMENT_NAMES[segment]


def segment_from_data(data: Any) -> LayoutSegment:
    if isinstance(data, str):
        if data not in _NAMED_SEGMENTS:
            raise SettingsFormatError(f"Unknown layout segment: {data}")
        return _NAMED_SEGMENTS[data]
    if isinstance(data, dict) and "package" in data:
        with_subpackages = data.get("with_subpackages", True)
        static = data.get("static", False)
        if not isinstance(with_subpackages, bool) or not isinstance(static, bool):
            raise SettingsFormatError(f"Layout segment flags must be true/false: {data!r}")
        return PackageGroup(
            package=str(data["package"]),
            with_subpackages=with_subpackages,
            static=static,
        )
    raise SettingsFormatError(f"Malformed layout segment: {data!r}")


def value_to_data(key: str, value: Any) -> Any:
    """Encode a setting value as plain YAML/JSON data."""
    kind = keys.KEY_TYPES.get(key)
    if kind == keys.PASTE:
        return value.value
    if kind in (keys.LAYOUT, keys.PACKAGES):
        return [segment_to_data(s) for s in value]
    if kind == keys.MARKER:
        return True
    return value


def value_from_data(key: str, data: Any) -> Any:
    """Decode plain YAML/JSON data into a setting value."""
    kind = keys.KEY_TYPES.get(key)
    if kind == keys.PASTE:
        try:
            return ImportsOnPaste(str(data).lower())
        except ValueError:
            raise SettingsFormatError(f"{key}: unknown choice {data!r}") from None
    if kind in (keys.LAYOUT, keys.PACKAGES):
        if not isinstance(data, list):
            raise SettingsFormatError(f"{key}: expected a list, got {data!r}")
        segments = [segment_from_data(item) for item in data]
        if kind == keys.PACKAGES and not all(isinstance(s, PackageGroup) for s in segments):
            raise SettingsFormatError(f"{key}: only package entries are allowed")
        return segments
    if kind == keys.MARKER and data is not True:
        raise SettingsFormatError(f"{key}: marker must be true, got {data!r}")
    if kind == keys.BOOL and not isinstance(data, bool):
        raise SettingsFormatError(f"{key}: expected true/false, got {data!r}")
    if kind == keys.INT and (isinstance(data, bool) or not isinstance(data, int)):
        raise SettingsFormatError(f"{key}: expected an integer, got {data!r}")
    return data


def settings_from_data(data: dict[str, Any]) -> dict[str, Any]:
    """Decode a settings mapping.

    A marker set to ``false`` means the host lacks that capability, so the
    key is left out.
    """
    return {
        key: value_from_data(key, value)
        for key, value in data.items()
        if not (keys.KEY_TYPES.get(key) == keys.MARKER and value is False)
    }


def readonly_from_data(data: Any) -> list[str]:
    """Decode a ``readonly`` entry: one key name or a list of them."""
    if data is None:
        return []
    if isinstance(data, str):
        return [data]
    if not isinstance(data, list) or not all(isinstance(k, str) for k in data):
        raise SettingsFormatError(f"readonly must be a list of setting names, got {data!r}")
    return list(data)


def settings_to_data(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value_to_data(key, value) for key, value in values.items()}


def canonical_layout(module_imports: bool = True) -> list[LayoutSegment]:
    """The house import layout."""
    layout: list[LayoutSegment] = [MODULE_IMPORTS] if module_imports else []
    layout.extend([
        PackageGroup("java", with_subpackages=True, static=False),
        PackageGroup("javax", with_subpackages=True, static=False),
        ALL_OTHER_IMPORTS,
        BLANK_LINE,
        ALL_OTHER_STATIC_IMPORTS,
    ])
    return layout


def default_host_settings(module_imports: bool = True) -> dict[str, Any]:
    """Settings of a current host already configured to the house style."""
    values: dict[str, Any] = {
        keys.ADD_UNAMBIGUOUS_IMPORTS_ON_THE_FLY: True,
        keys.OPTIMIZE_IMPORTS_ON_THE_FLY: True,
        keys.ADD_IMPORTS_ON_PASTE: ImportsOnPaste.ALWAYS,
        keys.SHOW_IMPORT_POPUP: True,
        keys.PROJECT_OPTIMIZE_IMPORTS_ON_THE_FLY: True,
        keys.INDENT_DETECTION_ENABLED: False,
        keys.WILDCARD_CLASS_THRESHOLD: 99,
        keys.WILDCARD_NAMES_THRESHOLD: 99,
        keys.IMPORT_LAYOUT_ORDER: canonical_layout(module_imports),
        keys.USE_SINGLE_CLASS_IMPORTS: True,
        keys.INSERT_INNER_CLASS_IMPORTS: True,
        keys.LAYOUT_STATIC_IMPORTS_SEPARATELY: True,
        keys.PACKAGES_TO_USE_IMPORT_ON_DEMAND: [],
        keys.USE_FQ_CLASS_NAMES: False,
        keys.CLASS_NAMES_IN_JAVADOC: keys.JAVADOC_FULLY_QUALIFIED_IF_NOT_IMPORTED,
    }
    if module_imports:
        values[keys.MODULE_IMPORTS_GROUP] = True
        values[keys.DO_NOT_SEPARATE_MODULE_IMPORTS] = True
        values[keys.DELETE_UNUSED_MODULE_IMPORTS] = False
    return values


class YamlSettingsStore(InMemorySettingsProvider):
    """Settings persisted in a YAML document.

    The document has a ``settings`` mapping and an optional ``readonly``
    list. Only keys present in ``settings`` are supported.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._document = self._read()
        super().__init__(
            settings_from_data(self._document.get("settings") or {}),
            readonly=readonly_from_data(self._document.get("readonly")),
        )
        logger.info("Loaded %d settings from %s", len(self.setting_names()), self.path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            raise FileNotFoundError(f"Settings file not found: {self.path}")

        with open(self.path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsFormatError(f"{self.path}: top level must be a mapping")
        if "settings" in data and not isinstance(data["settings"] or {}, dict):
            raise SettingsFormatError(f"{self.path}: 'settings' must be a mapping")
        return data

    def commit(self) -> None:
        document = dict(self._document)
        document["settings"] = settings_to_data(self.as_dict())
        try:
            with open(self.path, "w") as f:
                yaml.safe_dump(document, f, sort_keys=False)
        except OSError as e:
            raise SettingWriteError(str(self.path), e.strerror or str(e)) from e
        self._document = document
        logger.info("Settings written to %s", self.path)

    @classmethod
    def create(cls, path: str | Path, values: dict[str, Any],
               readonly: list[str] | None = None) -> YamlSettingsStore:
        """Write a new settings document and open it."""
        document: dict[str, Any] = {"settings": settings_to_data(values)}
        if readonly:
            document["readonly"] = list(readonly)
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(document, f, sort_keys=False)
        return cls(path)
