from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget

from consultadesk.app.application.ports.persistencia_port import PersistenceFailure
from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.domain.exceptions import (
    DomainError,
    NoActivePatientError,
    SuggestionInProgressError,
    ValidationError,
)

LOGGER = get_logger(__name__)


def present_error(parent: QWidget, exc: Exception, context: str | None = None) -> None:
    if isinstance(exc, ValidationError):
        QMessageBox.warning(parent, "Validación", str(exc))
        return

    if isinstance(exc, NoActivePatientError):
        QMessageBox.warning(parent, "Sin paciente", "Selecciona o registra un paciente primero.")
        return

    if isinstance(exc, SuggestionInProgressError):
        QMessageBox.information(parent, "CDSS", str(exc))
        return

    if isinstance(exc, DomainError):
        QMessageBox.warning(parent, "Aviso", str(exc))
        return

    if isinstance(exc, PersistenceFailure):
        LOGGER.warning("ui_persistence_failure context=%s error=%s", context or "-", exc)
        QMessageBox.warning(parent, "Almacenamiento", "No se pudo acceder al almacenamiento local.")
        return

    LOGGER.error("ui_unexpected_error context=%s", context or "-", exc_info=exc)
    QMessageBox.critical(
        parent,
        "Error",
        "Ha ocurrido un error inesperado. Revisa los datos o consulta el log.",
    )
