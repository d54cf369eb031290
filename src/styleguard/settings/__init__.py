"""Host settings access — capability discovery, in-memory and YAML hosts."""

from styleguard.settings.provider import (
    InMemorySettingsProvider,
    SettingsProvider,
    SettingsView,
    SettingsWriter,
)
from styleguard.settings.store import YamlSettingsStore, canonical_layout, default_host_settings

__all__ = [
    "InMemorySettingsProvider",
    "SettingsProvider",
    "SettingsView",
    "SettingsWriter",
    "YamlSettingsStore",
    "canonical_layout",
    "default_host_settings",
]
