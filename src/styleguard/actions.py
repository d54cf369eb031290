"""Trigger surfaces: startup check, "fix now", and fix current file's imports."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable

from styleguard.check.checker import ComplianceChecker
from styleguard.imports import JavaImportOptimizer
from styleguard.models import ComplianceReport, FixReport, NotificationLevel
from styleguard.notify.notifier import Notification, Notifier, ViolationFormatter
from styleguard.rules.builtin import module_imports_supported
from styleguard.settings import keys
from styleguard.settings.provider import SettingsProvider, SettingsView
from styleguard.settings.store import canonical_layout

logger = logging.getLogger(__name__)

FIX_NOW_LABEL = "Fix now"


class StyleGuardActions:
    """Glue between hosts, the checker and a notifier."""

    def __init__(self, checker: ComplianceChecker | None = None,
                 notifier: Notifier | None = None) -> None:
        self.checker = checker or ComplianceChecker()
        self.notifier = notifier
        self.formatter = ViolationFormatter()
        self._opened: set[str] = set()
        self._lock = threading.Lock()

    def on_project_open(self, project_id: str,
                        provider: SettingsProvider) -> ComplianceReport | None:
        """Run the startup check once per project.

        Returns the report, or None when the project was already checked.
        """
        with self._lock:
            if project_id in self._opened:
                logger.debug("Project %s already checked", project_id)
                return None
            self._opened.add(project_id)

        report = self.checker.check(provider, source=project_id)
        if report.compliant:
            return report

        logger.warning("Startup non-compliant rules for %s: %s",
                       project_id, "; ".join(report.violations))
        if self.notifier is not None and self.checker.profile.notify_on_startup:
            notification = Notification(
                title="Non-standard configuration detected",
                message=self.formatter.format_violations(report),
                level=NotificationLevel.WARNING,
            )
            notification.add_action(FIX_NOW_LABEL, lambda: self.fix_now(provider))
            self.notifier.notify(notification)
        return report

    def fix_now(self, provider: SettingsProvider, silent: bool = False) -> FixReport:
        """Apply the house style and tell the user unless silent."""
        result = self.checker.fix(provider)
        if not silent and self.notifier is not None:
            level = NotificationLevel.INFO if result.closed else NotificationLevel.WARNING
            self.notifier.notify(Notification(
                title="Configuration updated",
                message=self.formatter.format_fix(result),
                level=level,
            ))
        return result

    def fix_file_imports(self, provider: SettingsProvider, path: str | Path,
                         optimizer: Callable[[Path], Any] | None = None) -> FixReport:
        """Silently fix settings, then optimize one file's imports.

        Without an optimizer, the file is reordered by the provider's
        import layout as it stands after the fix.
        """
        result = self.fix_now(provider, silent=True)
        path = Path(path)
        if optimizer is None:
            view = SettingsView(provider)
            layout = view.get(keys.IMPORT_LAYOUT_ORDER,
                              canonical_layout(module_imports_supported(view)))
            optimizer = JavaImportOptimizer(layout).optimize_file
        optimizer(path)
        return result

    def reset(self, project_id: str | None = None) -> None:
        """Forget which projects were checked, so the next open checks again."""
        with self._lock:
            if project_id is None:
                self._opened.clear()
            else:
                self._opened.discard(project_id)
