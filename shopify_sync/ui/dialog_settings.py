from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QFormLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from shopify_sync.application.settings_service import SaveSettingsResult, SettingsService
from shopify_sync.core.errors import ValidationError
from shopify_sync.ui.error_mapping import map_error_to_ui_message
from shopify_sync.ui.patterns import SPACING_BASE, apply_modal_behavior, build_modal_actions


class SettingsDialog(QDialog):
    def __init__(self, settings_service: SettingsService, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._settings_service = settings_service
        self.last_result: SaveSettingsResult | None = None
        self.setWindowTitle("Settings")
        self._build_ui()
        self._load_credentials()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(SPACING_BASE * 2, SPACING_BASE * 2, SPACING_BASE * 2, SPACING_BASE * 2)
        layout.setSpacing(SPACING_BASE + 4)

        title = QLabel("Shopify Settings")
        title.setProperty("role", "subtitle")
        layout.addWidget(title)

        form_layout = QFormLayout()
        form_layout.setLabelAlignment(Qt.AlignLeft)

        self.shop_domain_input = QLineEdit()
        self.shop_domain_input.setPlaceholderText("your-store.myshopify.com")
        form_layout.addRow("Shop Domain", self.shop_domain_input)

        self.access_token_input = QLineEdit()
        self.access_token_input.setPlaceholderText("shpat_...")
        self.access_token_input.setEchoMode(QLineEdit.Password)
        form_layout.addRow("Access Token", self.access_token_input)

        self.show_token_checkbox = QCheckBox("Show token")
        self.show_token_checkbox.toggled.connect(self._on_toggle_token_visibility)
        form_layout.addRow("", self.show_token_checkbox)

        layout.addLayout(form_layout)

        hint = QLabel("Create a custom app in Shopify admin with read_products access to get a token.")
        hint.setProperty("role", "secondary")
        hint.setWordWrap(True)
        layout.addWidget(hint)

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)

        self.save_button = QPushButton("Save")
        self.save_button.setProperty("variant", "primary")
        self.save_button.clicked.connect(self._on_save)

        layout.addLayout(build_modal_actions(self.cancel_button, self.save_button))
        apply_modal_behavior(self, primary_button=self.save_button)

        self.shop_domain_input.textChanged.connect(self._update_save_enabled)
        self.access_token_input.textChanged.connect(self._update_save_enabled)

    def _load_credentials(self) -> None:
        credentials = self._settings_service.current_credentials()
        if credentials:
            self.shop_domain_input.setText(credentials.shop_domain)
            self.access_token_input.setText(credentials.access_token)
        self._update_save_enabled()

    def _update_save_enabled(self) -> None:
        filled = bool(self.shop_domain_input.text().strip()) and bool(self.access_token_input.text().strip())
        self.save_button.setEnabled(filled)

    def _on_toggle_token_visibility(self, visible: bool) -> None:
        self.access_token_input.setEchoMode(QLineEdit.Normal if visible else QLineEdit.Password)

    def _on_save(self) -> None:
        try:
            result = self._settings_service.save_settings(
                self.shop_domain_input.text(),
                self.access_token_input.text(),
            )
        except ValidationError as exc:
            mapped = map_error_to_ui_message(exc)
            QMessageBox.warning(self, "Validation", mapped.as_text())
            return
        self.last_result = result
        if result.error is not None:
            mapped = map_error_to_ui_message(result.error)
            QMessageBox.warning(self, mapped.title, mapped.as_text())
        self.accept()
