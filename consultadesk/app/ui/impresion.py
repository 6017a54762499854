from __future__ import annotations

from PySide6.QtGui import QTextDocument
from PySide6.QtPrintSupport import QPrintDialog, QPrinter
from PySide6.QtWidgets import QDialog, QWidget

from consultadesk.app.application.documentos.documento_visita import DocumentoClinico
from consultadesk.app.bootstrap_logging import get_logger

LOGGER = get_logger(__name__)


def build_text_document(documento: DocumentoClinico) -> QTextDocument:
    texto = QTextDocument()
    texto.setHtml(documento.html)
    texto.setMetaInformation(QTextDocument.DocumentTitle, documento.titulo)
    return texto


def print_document(parent: QWidget, documento: DocumentoClinico) -> bool:
    """Muestra el diálogo de impresión; devuelve False si el usuario cancela."""
    printer = QPrinter(QPrinter.HighResolution)
    printer.setDocName(documento.titulo)
    dialogo = QPrintDialog(printer, parent)
    if dialogo.exec() != QDialog.Accepted:
        LOGGER.info("print_cancelled visit_id=%s", documento.visita_id)
        return False
    build_text_document(documento).print_(printer)
    LOGGER.info("print_sent visit_id=%s", documento.visita_id)
    return True
