"""Compliance checking engine — orchestrates rule evaluation and fixing."""

from __future__ import annotations

import logging
from pathlib import Path

from styleguard.models import ComplianceReport, FixReport, HouseStyle
from styleguard.rules.builtin import build_house_rules
from styleguard.rules.engine import ComplianceEngine
from styleguard.rules.loader import ProfileLoader
from styleguard.settings.provider import SettingsProvider

logger = logging.getLogger(__name__)


class ComplianceChecker:
    """Main compliance checking orchestrator.

    Loads the house-style profile, builds the engine from it, and produces
    reports for settings providers.
    """

    def __init__(self, profile: HouseStyle | None = None,
                 profile_path: str | Path | None = None) -> None:
        self.loader = ProfileLoader()
        if profile is None:
            profile = (self.loader.load_file(profile_path) if profile_path
                       else self.loader.load_builtin())
        self.profile = profile

        rules = [r for r in build_house_rules(profile.wildcard_threshold)
                 if r.name not in profile.disabled_rules]
        self.engine = ComplianceEngine(rules)

        logger.info("ComplianceChecker initialized with %d rules (profile '%s')",
                    self.engine.rule_count, profile.name)

    def check(self, provider: SettingsProvider, source: str = "") -> ComplianceReport:
        """Check a settings provider against the house style."""
        violations = self.engine.check_compliance(provider)

        total_rules = self.engine.rule_count
        score = max(0.0, (1 - len(violations) / max(total_rules, 1)) * 100)

        report = ComplianceReport(
            profile=self.profile.name,
            source=source,
            violations=violations,
            titles={r.name: r.title for r in self.engine.rules},
            total_rules_checked=total_rules,
            compliance_score=round(score, 1),
        )
        report.summary = self._generate_summary(report)
        return report

    def fix(self, provider: SettingsProvider) -> FixReport:
        """Apply house-style fixes to a provider and verify the result."""
        return self.engine.apply_fix(provider)

    def _generate_summary(self, report: ComplianceReport) -> str:
        lines = [
            f"Compliance Score: {report.compliance_score}%",
            f"Rules Checked: {report.total_rules_checked}",
            f"Violations: {len(report.violations)}",
        ]
        if report.compliant:
            lines.append("\nSettings match the house style.")
        else:
            lines.append("\nSettings deviate from the house style. Run a fix to correct them.")
        return "\n".join(lines)
