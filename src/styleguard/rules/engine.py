"""Compliance rule evaluation and remediation engine."""

from __future__ import annotations

import logging
from typing import Callable

from styleguard.errors import SettingWriteError
from styleguard.models import FixReport, Rule
from styleguard.rules.builtin import apply_companion_writes
from styleguard.settings.provider import SettingsProvider, SettingsView, SettingsWriter

logger = logging.getLogger(__name__)


class ComplianceEngine:
    """Evaluates rules against host settings and applies their fixes.

    The engine holds no settings state between calls; every check reads
    the provider afresh.
    """

    def __init__(self, rules: list[Rule] | None = None,
                 companion_writes: Callable[[SettingsWriter], None] | None = apply_companion_writes) -> None:
        self._rules: list[Rule] = []
        self._companion_writes = companion_writes
        if rules:
            self.add_rules(rules)

    def add_rules(self, rules: list[Rule]) -> None:
        """Add rules to the engine."""
        for rule in rules:
            if any(r.name == rule.name for r in self._rules):
                raise ValueError(f"Duplicate rule name: {rule.name}")
            self._rules.append(rule)
        logger.debug("Engine now has %d rules", len(self._rules))

    @property
    def rule_count(self) -> int:
        return len(self._rules)

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def get_rule(self, name: str) -> Rule | None:
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def check_compliance(self, provider: SettingsProvider) -> list[str]:
        """Return the names of violated rules, in registration order."""
        view = SettingsView(provider)
        violated = [rule.name for rule in self._rules if not rule.predicate(view)]
        if violated:
            logger.info("Non-compliant rules: %s", "; ".join(violated))
        else:
            logger.info("Compliance check: all %d rules are compliant", len(self._rules))
        return violated

    def apply_fix(self, provider: SettingsProvider) -> FixReport:
        """Fix every violated rule, then re-check.

        Runs inside the provider's write scope. Rules that share a fix
        callable are fixed by one call. A rejected write fails only the
        rules behind that fix. If the scope cannot commit, every fix counts
        as failed.
        """
        report = FixReport()

        try:
            self._fix_in_scope(provider, report)
        except SettingWriteError as e:
            logger.warning("Fixed settings could not be committed: %s", e)
            uncommitted = set(report.failed) | set(report.applied)
            report.failed = [rule.name for rule in self._rules if rule.name in uncommitted]
            report.applied = []
            unsaved = set(report.failed) | set(self.check_compliance(provider))
            report.remaining = [rule.name for rule in self._rules if rule.name in unsaved]

        if report.remaining:
            logger.warning("Settings still non-compliant after fix: %s",
                           "; ".join(report.remaining))
        else:
            logger.info("Applied fixes for %d rules", len(report.applied))
        return report

    def _fix_in_scope(self, provider: SettingsProvider, report: FixReport) -> None:
        with provider.write_scope():
            violated = self.check_compliance(provider)
            report.attempted = list(violated)
            writer = SettingsWriter(provider)

            pending: list[tuple[Callable[[SettingsWriter], None], list[str]]] = []
            for name in violated:
                rule = self.get_rule(name)
                for fix, names in pending:
                    if fix is rule.fix:
                        names.append(name)
                        break
                else:
                    pending.append((rule.fix, [name]))

            for fix, names in pending:
                try:
                    fix(writer)
                except SettingWriteError as e:
                    logger.warning("Fix for %s failed: %s", ", ".join(names), e)
                    report.failed.extend(names)
                else:
                    report.applied.extend(names)

            if violated and self._companion_writes is not None:
                self._companion_writes(writer)

            report.skipped_settings = list(writer.skipped)
            report.remaining = self.check_compliance(provider)
