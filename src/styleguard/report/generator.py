"""Report generator — JSON and plain text."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from styleguard.models import ComplianceReport, FixReport

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Render compliance and fix reports as text or JSON."""

    def compliance_data(self, report: ComplianceReport) -> dict[str, Any]:
        return {
            "report_id": report.report_id,
            "title": report.title,
            "generated_at": report.generated_at.isoformat(),
            "profile": report.profile,
            "source": report.source,
            "compliant": report.compliant,
            "compliance_score": report.compliance_score,
            "total_rules_checked": report.total_rules_checked,
            "violations": [
                {"rule": name, "title": report.titles.get(name, name)}
                for name in report.violations
            ],
        }

    def fix_data(self, report: FixReport) -> dict[str, Any]:
        return {
            "report_id": report.report_id,
            "generated_at": report.generated_at.isoformat(),
            "closed": report.closed,
            "attempted": report.attempted,
            "applied": report.applied,
            "failed": report.failed,
            "skipped_settings": report.skipped_settings,
            "remaining": report.remaining,
        }

    def generate_json(self, report: ComplianceReport | FixReport,
                      output_path: str | Path | None = None) -> str:
        """Generate a JSON report."""
        if isinstance(report, FixReport):
            data = self.fix_data(report)
        else:
            data = self.compliance_data(report)

        json_str = json.dumps(data, indent=2)
        if output_path:
            Path(output_path).write_text(json_str)
            logger.info("JSON report generated: %s", output_path)
        return json_str

    def generate_text(self, report: ComplianceReport,
                      output_path: str | Path | None = None) -> str:
        """Generate a plain text compliance report."""
        lines = [
            "=" * 70,
            "STYLEGUARD COMPLIANCE REPORT",
            "=" * 70,
            f"Report ID:        {report.report_id}",
            f"Generated:        {report.generated_at.strftime('%Y-%m-%d %H:%M UTC')}",
            f"Profile:          {report.profile}",
        ]
        if report.source:
            lines.append(f"Source:           {report.source}")
        lines.extend([
            f"Compliance Score: {report.compliance_score}%",
            "",
            "-" * 70,
            "SUMMARY",
            "-" * 70,
            report.summary or "(no summary)",
            "",
        ])

        if report.violations:
            lines.append("-" * 70)
            lines.append("VIOLATIONS")
            lines.append("-" * 70)
            for i, name in enumerate(report.violations, 1):
                lines.append(f"{i}. {report.titles.get(name, name)} [{name}]")

        lines.append("")
        lines.append("=" * 70)
        lines.append("End of Report")
        lines.append("=" * 70)

        text = "\n".join(lines)
        if output_path:
            Path(output_path).write_text(text)
            logger.info("Text report generated: %s", output_path)
        return text

    def generate_fix_text(self, report: FixReport) -> str:
        lines = [f"Fixed rules: {', '.join(report.applied) or '(none)'}"]
        if report.failed:
            lines.append(f"Failed: {', '.join(report.failed)}")
        if report.skipped_settings:
            lines.append(f"Unsupported settings skipped: {', '.join(report.skipped_settings)}")
        if report.remaining:
            lines.append(f"Still non-compliant: {', '.join(report.remaining)}")
        else:
            lines.append("Settings are compliant.")
        return "\n".join(lines)
