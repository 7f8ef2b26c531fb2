from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QDialog, QHBoxLayout, QPushButton

SPACING_BASE = 8
MODAL_BASE_WIDTH = 460


@dataclass(frozen=True)
class UiStatusPattern:
    label: str
    icon: str
    tone: str

    def as_badge(self) -> str:
        return f"{self.icon} {self.label}"


STATUS_PATTERNS: dict[str, UiStatusPattern] = {
    "success": UiStatusPattern("Connected", "●", "success"),
    "pending": UiStatusPattern("Connecting", "●", "pending"),
    "error": UiStatusPattern("Not Connected", "●", "error"),
}


def status_badge(tone: str) -> str:
    pattern = STATUS_PATTERNS.get(tone)
    return pattern.as_badge() if pattern else tone


def status_dot(tone: str) -> str:
    pattern = STATUS_PATTERNS.get(tone)
    return pattern.icon if pattern else ""


def apply_modal_behavior(dialog: QDialog, *, primary_button: QPushButton | None = None) -> None:
    dialog.setMinimumWidth(MODAL_BASE_WIDTH)
    QShortcut(QKeySequence(Qt.Key_Escape), dialog, activated=dialog.reject)
    if primary_button is not None:
        primary_button.setDefault(True)
        primary_button.setAutoDefault(True)


def build_modal_actions(cancel_button: QPushButton, primary_button: QPushButton | None = None) -> QHBoxLayout:
    layout = QHBoxLayout()
    layout.setSpacing(SPACING_BASE)
    layout.addStretch(1)
    layout.addWidget(cancel_button)
    if primary_button is not None:
        layout.addWidget(primary_button)
    return layout
