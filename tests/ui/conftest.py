import inspect
import os
from pathlib import Path

import pytest


def _qt_ready() -> bool:
    try:
        from PySide6.QtWidgets import QApplication

        _ = QApplication
        return True
    except Exception:
        return False


def require_qt():
    # Solo para tests/ui/**: los tests de dominio no deben depender del backend Qt.
    caller_file = Path(inspect.stack()[1].filename).as_posix()
    if "/tests/ui/" not in f"/{caller_file}":
        raise RuntimeError("require_qt() solo debe usarse desde tests/ui/**")

    try:
        from PySide6.QtWidgets import QApplication

        return QApplication
    except Exception:
        pytest.skip("PySide6 no disponible correctamente en entorno CI", allow_module_level=True)


@pytest.fixture
def qapp():
    QApplication = require_qt()
    return QApplication.instance() or QApplication([])


def _is_ui_item(item: pytest.Item) -> bool:
    parts = Path(str(item.path)).as_posix().split("/")
    return any(parts[idx] == "tests" and parts[idx + 1] == "ui" for idx in range(len(parts) - 1))


def pytest_collection_modifyitems(config, items):
    skip_ui_in_ci = os.getenv("CI") == "true" and os.getenv("RUN_UI_TESTS") != "1"
    qt_ready = _qt_ready()

    skip_in_ci = pytest.mark.skip(reason="UI tests desactivados en CI por defecto (RUN_UI_TESTS=1 para activarlos).")
    skip_qt = pytest.mark.skip(reason="PySide6 no disponible correctamente en entorno CI")

    for item in items:
        # Los tests headless_safe no crean widgets y corren también en CI.
        if not _is_ui_item(item) or "headless_safe" in item.keywords:
            continue
        if skip_ui_in_ci:
            item.add_marker(skip_in_ci)
        elif not qt_ready:
            item.add_marker(skip_qt)
