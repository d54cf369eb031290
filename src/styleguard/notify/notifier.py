"""Notifications for non-compliant settings, with remediation actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

import click

from styleguard.models import ComplianceReport, FixReport, NotificationLevel

logger = logging.getLogger(__name__)

GROUP_ID = "StyleGuard Config Checker"


@dataclass
class NotificationAction:
    label: str
    callback: Callable[[], None]


@dataclass
class Notification:
    """A message shown to the user, optionally offering actions."""

    title: str
    message: str
    level: NotificationLevel = NotificationLevel.INFO
    group_id: str = GROUP_ID
    actions: list[NotificationAction] = field(default_factory=list)
    expired: bool = False

    def add_action(self, label: str, callback: Callable[[], None]) -> None:
        self.actions.append(NotificationAction(label, callback))

    def perform(self, label: str) -> None:
        """Run the named action and expire the notification."""
        if self.expired:
            logger.debug("Ignoring action '%s' on expired notification", label)
            return
        for action in self.actions:
            if action.label == label:
                action.callback()
                self.expire()
                return
        raise KeyError(f"No action labelled {label!r}")

    def expire(self) -> None:
        self.expired = True


class ViolationFormatter:
    """Turn violated rules into human-readable notification text."""

    def format_violations(self, report: ComplianceReport) -> str:
        if report.compliant:
            return "All house-style rules are satisfied."
        bullets = "\n".join(f"  • {title}" for title in report.violation_titles())
        return (
            "Project settings do not match the house style.\n"
            f"Not compliant:\n{bullets}\n\n"
            "Apply the house style now?"
        )

    def format_fix(self, report: FixReport) -> str:
        if report.closed:
            return "House-style settings applied (imports, layout and code style)."
        return (
            "House-style settings partially applied. Still not compliant: "
            + ", ".join(report.remaining)
        )


class Notifier:
    """Destination for notifications."""

    def notify(self, notification: Notification) -> None:
        raise NotImplementedError


class RecordingNotifier(Notifier):
    """Keeps every notification in memory."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None


class ConsoleNotifier(Notifier):
    """Prints notifications to the terminal.

    With ``interactive`` set, offers each action as a confirmation prompt.
    """

    _COLORS = {
        NotificationLevel.INFO: "green",
        NotificationLevel.WARNING: "yellow",
        NotificationLevel.ERROR: "red",
    }

    def __init__(self, interactive: bool = False) -> None:
        self.interactive = interactive

    def notify(self, notification: Notification) -> None:
        color = self._COLORS.get(notification.level, "white")
        click.echo(click.style(notification.title, fg=color, bold=True))
        click.echo(notification.message)
        if not self.interactive:
            return
        for action in list(notification.actions):
            if notification.expired:
                break
            if click.confirm(action.label, default=False):
                notification.perform(action.label)
