# bootstrap.py
"""
Bootstrap de la aplicación ConsultaDesk.

Responsabilidades:
- Resolver configuración desde argumentos/entorno/valores por defecto (con trazabilidad en logs)
- Construir el almacén clave-valor (JSON local o SQLite)

Este archivo es infraestructura pura.
No contiene lógica de dominio ni de aplicación.
"""

from __future__ import annotations

from os import getenv
from pathlib import Path

from consultadesk.app.application.ports.persistencia_port import PersistenciaPort
from consultadesk.app.application.protocolos.motor import DELAY_MS_POR_DEFECTO
from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.infrastructure.persistencia.local_json_gateway import LocalJsonGateway
from consultadesk.app.infrastructure.sqlite.db import bootstrap as bootstrap_sqlite
from consultadesk.app.infrastructure.sqlite.kv_gateway import SqliteKeyValueGateway

LOGGER = get_logger(__name__)

ENV_DATA_DIR = "CONSULTADESK_DATA_DIR"
ENV_STORAGE = "CONSULTADESK_STORAGE"
ENV_AI_DELAY_MS = "CONSULTADESK_AI_DELAY_MS"
ENV_LOG_LEVEL = "CONSULTADESK_LOG_LEVEL"

BACKEND_JSON = "json"
BACKEND_SQLITE = "sqlite"
BACKENDS = (BACKEND_JSON, BACKEND_SQLITE)
NIVELES_LOG = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_data_dir() -> Path:
    return Path("./data")


def resolve_data_dir(data_dir_arg: str | None = None, *, emit_log: bool = True) -> Path:
    """Resuelve el directorio de datos desde arg/env/default con trazabilidad en logs."""
    if data_dir_arg:
        resolved = Path(data_dir_arg).expanduser().resolve()
        source = "arg"
    else:
        configured = getenv(ENV_DATA_DIR)
        if configured:
            resolved = Path(configured).expanduser().resolve()
            source = "env"
        else:
            resolved = default_data_dir().expanduser().resolve()
            source = "default"
    if emit_log:
        LOGGER.info("data_dir_resolved path=%s source=%s", resolved, source)
    return resolved


def resolve_storage_backend(*, emit_log: bool = True) -> str:
    configured = (getenv(ENV_STORAGE) or "").strip().lower()
    if not configured:
        backend, source = BACKEND_JSON, "default"
    elif configured in BACKENDS:
        backend, source = configured, "env"
    else:
        LOGGER.warning("storage_backend_invalid value=%s fallback=%s", configured, BACKEND_JSON)
        backend, source = BACKEND_JSON, "fallback"
    if emit_log:
        LOGGER.info("storage_backend_resolved backend=%s source=%s", backend, source)
    return backend


def resolve_ai_delay_ms(*, emit_log: bool = True) -> int:
    configured = getenv(ENV_AI_DELAY_MS)
    delay, source = DELAY_MS_POR_DEFECTO, "default"
    if configured is not None and configured.strip():
        try:
            delay = max(0, int(configured))
            source = "env"
        except ValueError:
            LOGGER.warning("ai_delay_invalid value=%s fallback=%s", configured, DELAY_MS_POR_DEFECTO)
            source = "fallback"
    if emit_log:
        LOGGER.info("ai_delay_resolved delay_ms=%s source=%s", delay, source)
    return delay


def resolve_log_level() -> str:
    configured = (getenv(ENV_LOG_LEVEL) or "").strip().upper()
    return configured if configured in NIVELES_LOG else "INFO"


def build_gateway(backend: str, data_dir: Path) -> PersistenciaPort:
    if backend == BACKEND_SQLITE:
        db_path = data_dir / "consultadesk.db"
        LOGGER.info("db_path_resolved path=%s", db_path)
        return SqliteKeyValueGateway(bootstrap_sqlite(db_path))
    return LocalJsonGateway(data_dir)
