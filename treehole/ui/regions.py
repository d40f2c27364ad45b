"""Retained UI state: replaceable regions, submit controls, inputs and notices.

A region is the unit the coordinator and the submission flow write into. Once
the reconciler replaces the fragment that owns a region it is detached, and any
late write to it is ignored.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from markupsafe import Markup

logger = logging.getLogger(__name__)

NoticeLevel = Literal["info", "success", "warning", "error"]


class Region:
    def __init__(self, name: str, html: Markup | str = "") -> None:
        self.name = name
        self._html = Markup(html)
        self.attached = True
        self.writes = 0

    @property
    def html(self) -> Markup:
        return self._html

    def replace(self, html: Markup | str) -> bool:
        """Swap the region contents; returns False when the region is gone."""

        if not self.attached:
            logger.debug("Ignoring write to detached region %s", self.name)
            return False
        self._html = Markup(html)
        self.writes += 1
        return True

    def detach(self) -> None:
        self.attached = False

    def __html__(self) -> Markup:
        return self._html


class Control:
    """A button that locks itself while its action is outstanding."""

    def __init__(self, label: str, *, busy_label: str | None = None) -> None:
        self.idle_label = label
        self.busy_label = busy_label or label
        self.label = label
        self.disabled = False

    def acquire(self) -> bool:
        if self.disabled:
            return False
        self.disabled = True
        self.label = self.busy_label
        return True

    def release(self) -> None:
        self.disabled = False
        self.label = self.idle_label


@dataclass
class TextInput:
    value: str = ""

    def clear(self) -> None:
        self.value = ""


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str
    blocking: bool = False


@dataclass
class NotificationTray:
    """Toasts and blocking alerts waiting to be shown to the user."""

    notices: list[Notice] = field(default_factory=list)

    def push(self, level: NoticeLevel, message: str, *, blocking: bool = False) -> Notice:
        notice = Notice(level=level, message=message, blocking=blocking)
        self.notices.append(notice)
        return notice

    def info(self, message: str) -> Notice:
        return self.push("info", message)

    def success(self, message: str) -> Notice:
        return self.push("success", message)

    def warning(self, message: str) -> Notice:
        return self.push("warning", message)

    def error(self, message: str) -> Notice:
        return self.push("error", message, blocking=True)

    def drain(self) -> list[Notice]:
        pending, self.notices = self.notices, []
        return pending


__all__ = ["Region", "Control", "TextInput", "Notice", "NotificationTray"]
