"""Exception hierarchy for StyleGuard."""

from __future__ import annotations


class StyleGuardError(Exception):
    """Base class for StyleGuard errors."""


class UnsupportedSettingError(StyleGuardError, KeyError):
    """The running host does not expose a setting."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Setting not supported by host: {self.key}"


class SettingWriteError(StyleGuardError):
    """The host rejected a write to a setting."""

    def __init__(self, key: str, reason: str = "") -> None:
        super().__init__(f"Cannot write {key}: {reason}" if reason else f"Cannot write {key}")
        self.key = key
        self.reason = reason


class ProfileError(StyleGuardError, ValueError):
    """A house-style profile is malformed."""


class SettingsFormatError(StyleGuardError, ValueError):
    """A serialized settings document cannot be decoded."""
