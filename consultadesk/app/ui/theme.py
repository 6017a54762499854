from __future__ import annotations

from pathlib import Path

from consultadesk.app.bootstrap_logging import get_logger

LOGGER = get_logger(__name__)


def load_qss() -> str:
    """Carga el QSS principal desde app/ui/styles/main.qss.

    Devuelve cadena vacía si el archivo no existe o falla la lectura.
    """
    qss_path = Path(__file__).parent / "styles" / "main.qss"
    if not qss_path.exists():
        return ""
    try:
        return qss_path.read_text(encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("qss_load_failed path=%s error=%s", qss_path, exc)
        return ""
