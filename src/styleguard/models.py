"""Core data models for StyleGuard."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from styleguard.settings.provider import SettingsView, SettingsWriter


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ImportsOnPaste(enum.Enum):
    """Host choice for inserting imports when code is pasted."""

    ALWAYS = "always"
    ASK = "ask"
    NEVER = "never"


class NotificationLevel(enum.Enum):
    """Notification levels understood by notifiers."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


# -- Import layout segments -------------------------------------------------


@dataclass(frozen=True)
class PackageGroup:
    """An import group for one package, e.g. ``java.*``."""

    package: str
    with_subpackages: bool = True
    static: bool = False

    def matches(self, qualified_name: str) -> bool:
        if qualified_name == self.package:
            return True
        if not qualified_name.startswith(self.package + "."):
            return False
        rest = qualified_name[len(self.package) + 1:]
        return self.with_subpackages or "." not in rest

    def __str__(self) -> str:
        prefix = "static " if self.static else ""
        suffix = ".**" if self.with_subpackages else ".*"
        return f"{prefix}{self.package}{suffix}"


@dataclass(frozen=True)
class BlankLine:
    def __str__(self) -> str:
        return "<blank line>"


@dataclass(frozen=True)
class AllOtherImports:
    def __str__(self) -> str:
        return "<all other imports>"


@dataclass(frozen=True)
class AllOtherStaticImports:
    def __str__(self) -> str:
        return "<all other static imports>"


@dataclass(frozen=True)
class ModuleImportsGroup:
    def __str__(self) -> str:
        return "<module imports>"


LayoutSegment = Union[
    PackageGroup, BlankLine, AllOtherImports, AllOtherStaticImports, ModuleImportsGroup
]

BLANK_LINE = BlankLine()
ALL_OTHER_IMPORTS = AllOtherImports()
ALL_OTHER_STATIC_IMPORTS = AllOtherStaticImports()
MODULE_IMPORTS = ModuleImportsGroup()


def describe_layout(layout: list[LayoutSegment] | None) -> str:
    """Render a layout sequence on one line, for logs and reports."""
    if layout is None:
        return "<null>"
    return " | ".join(str(segment) for segment in layout)


# -- Rules and results -------------------------------------------------------


@dataclass
class Rule:
    """A named compliance rule with its predicate and corrective fix.

    Rules sharing the same ``fix`` callable are fixed by a single call.
    """

    name: str
    title: str
    predicate: Callable[[SettingsView], bool]
    fix: Callable[[SettingsWriter], None]
    description: str = ""
    settings: tuple[str, ...] = ()


@dataclass
class ComplianceReport:
    """Result of one compliance check."""

    report_id: str = field(default_factory=lambda: str(uuid.uuid4())[:12])
    title: str = "StyleGuard Compliance Report"
    generated_at: datetime = field(default_factory=_utcnow)
    profile: str = "house"
    source: str = ""
    violations: list[str] = field(default_factory=list)
    titles: dict[str, str] = field(default_factory=dict)
    total_rules_checked: int = 0
    compliance_score: float = 100.0
    summary: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def compliant(self) -> bool:
        return not self.violations

    def violation_titles(self) -> list[str]:
        return [self.titles.get(name, name) for name in self.violations]


@dataclass
class FixReport:
    """Outcome of applying house-style fixes.

    ``remaining`` holds the violations found by the re-check that follows
    every fix.
    """

    report_id: str = field(default_factory=lambda: str(uuid.uuid4())[:12])
    generated_at: datetime = field(default_factory=_utcnow)
    attempted: list[str] = field(default_factory=list)
    applied: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped_settings: list[str] = field(default_factory=list)
    remaining: list[str] = field(default_factory=list)

    @property
    def closed(self) -> bool:
        return not self.remaining


@dataclass
class HouseStyle:
    """A house-style profile: which rules run and with what thresholds."""

    name: str = "house"
    description: str = ""
    wildcard_threshold: int = 99
    disabled_rules: list[str] = field(default_factory=list)
    notify_on_startup: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)
