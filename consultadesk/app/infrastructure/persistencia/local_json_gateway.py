from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from consultadesk.app.application.ports.persistencia_port import PersistenceFailure, PersistenciaPort
from consultadesk.app.bootstrap_logging import get_logger

LOGGER = get_logger(__name__)


class LocalJsonGateway(PersistenciaPort):
    """Almacén clave-valor local: un archivo JSON por clave lógica."""

    def __init__(self, base_path: str | Path) -> None:
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def load(self, key: str) -> Any | None:
        file_path = self._file_path(key)
        if not file_path.exists():
            return None
        try:
            with file_path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, ValueError) as exc:
            raise PersistenceFailure(f"No se pudo leer '{key}': {exc}") from exc

    def save(self, key: str, payload: Any) -> None:
        file_path = self._file_path(key)
        tmp_path = file_path.with_suffix(".json.tmp")
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False, indent=2)
            # Reemplazo atómico: un fallo a mitad nunca deja el archivo truncado.
            os.replace(tmp_path, file_path)
        except (OSError, TypeError, ValueError) as exc:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceFailure(f"No se pudo escribir '{key}': {exc}") from exc
        LOGGER.debug("json_key_saved key=%s", key)

    def _file_path(self, key: str) -> Path:
        return self._base_path / f"{key}.json"
