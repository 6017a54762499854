from __future__ import annotations

import sys
import uuid
from pathlib import Path

from PySide6.QtWidgets import QApplication

from consultadesk.app.bootstrap import (
    build_gateway,
    resolve_ai_delay_ms,
    resolve_data_dir,
    resolve_log_level,
    resolve_storage_backend,
)
from consultadesk.app.bootstrap_logging import (
    configure_logging,
    get_logger,
    install_global_exception_hook,
    set_run_context,
)
from consultadesk.app.container import build_container
from consultadesk.app.ui.main_window import MainWindow
from consultadesk.app.ui.planificador_qt import PlanificadorQt
from consultadesk.app.ui.theme import load_qss

LOGGER = get_logger(__name__)


def main() -> int:
    configure_logging("consultadesk-ui", Path("./logs"), level=resolve_log_level(), json=True)
    set_run_context(uuid.uuid4().hex[:8])
    install_global_exception_hook(LOGGER)

    app = QApplication(sys.argv)
    app.setStyleSheet(load_qss())

    data_dir = resolve_data_dir()
    gateway = build_gateway(resolve_storage_backend(), data_dir)
    container = build_container(gateway, PlanificadorQt(app), delay_ms=resolve_ai_delay_ms())

    window = MainWindow(container)
    window.show()
    LOGGER.info("app_started")
    try:
        return app.exec()
    finally:
        container.close()


if __name__ == "__main__":
    raise SystemExit(main())
