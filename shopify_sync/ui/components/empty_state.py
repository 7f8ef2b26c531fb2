from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget


class EmptyStateWidget(QWidget):
    def __init__(
        self,
        title: str,
        description: str,
        action_text: str | None = None,
        on_action: Callable[[], None] | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)
        layout.addStretch(1)

        self.title_label = QLabel(title)
        self.title_label.setProperty("role", "subtitle")
        self.title_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.title_label)

        self.description_label = QLabel(description)
        self.description_label.setProperty("role", "secondary")
        self.description_label.setAlignment(Qt.AlignCenter)
        self.description_label.setWordWrap(True)
        layout.addWidget(self.description_label)

        self.action_button: QPushButton | None = None
        if action_text:
            self.action_button = QPushButton(action_text)
            self.action_button.setProperty("variant", "primary")
            if on_action is not None:
                self.action_button.clicked.connect(on_action)
            layout.addWidget(self.action_button, 0, Qt.AlignCenter)

        layout.addStretch(1)

    def set_description(self, description: str) -> None:
        self.description_label.setText(description)


class LoadingStateWidget(QWidget):
    def __init__(self, message: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.addStretch(1)
        self.message_label = QLabel(message)
        self.message_label.setProperty("role", "secondary")
        self.message_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.message_label)
        layout.addStretch(1)
