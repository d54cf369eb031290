"""Capability-discovery settings interface and the in-memory host."""

from __future__ import annotations

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterable, Iterator

from styleguard.errors import SettingWriteError, UnsupportedSettingError
from styleguard.settings.keys import is_valid_value

logger = logging.getLogger(__name__)


class SettingsProvider:
    """Host settings reached only through named accessors.

    Subclasses implement ``has_setting``, ``get_setting``, ``set_setting``
    and ``setting_names``. Writes must happen inside ``write_scope()``,
    which is exclusive and reentrant; ``commit()`` runs when the outermost
    scope exits cleanly.
    """

    def __init__(self) -> None:
        self._write_lock = threading.RLock()
        self._scope_depth = 0

    def has_setting(self, key: str) -> bool:
        raise NotImplementedError

    def get_setting(self, key: str) -> Any:
        raise NotImplementedError

    def set_setting(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def setting_names(self) -> list[str]:
        raise NotImplementedError

    def commit(self) -> None:
        """Persist pending writes. The default host keeps them in memory."""

    @contextmanager
    def write_scope(self) -> Iterator[SettingsProvider]:
        with self._write_lock:
            self._scope_depth += 1
            try:
                yield self
            except BaseException:
                self._scope_depth -= 1
                raise
            self._scope_depth -= 1
            if self._scope_depth == 0:
                self.commit()

    @property
    def in_write_scope(self) -> bool:
        return self._scope_depth > 0


class InMemorySettingsProvider(SettingsProvider):
    """Dict-backed host. Keys absent from the dict are unsupported."""

    def __init__(self, values: dict[str, Any] | None = None,
                 readonly: Iterable[str] = ()) -> None:
        super().__init__()
        self._values: dict[str, Any] = dict(values or {})
        self._readonly = set(readonly)

    def has_setting(self, key: str) -> bool:
        return key in self._values

    def get_setting(self, key: str) -> Any:
        if key not in self._values:
            raise UnsupportedSettingError(key)
        return copy.copy(self._values[key])

    def set_setting(self, key: str, value: Any) -> None:
        if key not in self._values:
            raise UnsupportedSettingError(key)
        if not self.in_write_scope:
            raise SettingWriteError(key, "write outside of write scope")
        if key in self._readonly:
            raise SettingWriteError(key, "setting is read-only")
        if not is_valid_value(key, value):
            raise SettingWriteError(key, f"invalid value {value!r}")
        self._values[key] = copy.copy(value)

    def setting_names(self) -> list[str]:
        return list(self._values.keys())

    def as_dict(self) -> dict[str, Any]:
        return {k: copy.copy(v) for k, v in self._values.items()}


class SettingsView:
    """Read view over a provider that fails open on unsupported keys."""

    def __init__(self, provider: SettingsProvider) -> None:
        self.provider = provider

    def supports(self, key: str) -> bool:
        return self.provider.has_setting(key)

    def get(self, key: str, default: Any = None) -> Any:
        if not self.provider.has_setting(key):
            return default
        try:
            return self.provider.get_setting(key)
        except UnsupportedSettingError:
            return default


class SettingsWriter(SettingsView):
    """Write access used by rule fixes.

    Writes to unsupported keys are skipped and recorded. Host rejections
    propagate as SettingWriteError.
    """

    def __init__(self, provider: SettingsProvider) -> None:
        super().__init__(provider)
        self.skipped: list[str] = []

    def set(self, key: str, value: Any) -> bool:
        if not self.provider.has_setting(key):
            logger.debug("Skipping write to unsupported setting %s", key)
            if key not in self.skipped:
                self.skipped.append(key)
            return False
        try:
            self.provider.set_setting(key, value)
        except UnsupportedSettingError:
            logger.debug("Host dropped setting %s during write", key)
            if key not in self.skipped:
                self.skipped.append(key)
            return False
        logger.debug("Set %s = %r", key, value)
        return True
