from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from typing import Any

from consultadesk.app.application.ports.persistencia_port import PersistenceFailure, PersistenciaPort
from consultadesk.app.bootstrap_logging import get_logger

LOGGER = get_logger(__name__)


class SqliteKeyValueGateway(PersistenciaPort):
    """Almacén clave-valor sobre la tabla ``kv_store`` (valor en JSON)."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._con = connection

    def load(self, key: str) -> Any | None:
        try:
            row = self._con.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceFailure(f"No se pudo leer '{key}': {exc}") from exc
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except ValueError as exc:
            raise PersistenceFailure(f"Valor corrupto en '{key}': {exc}") from exc

    def save(self, key: str, payload: Any) -> None:
        try:
            value = json.dumps(payload, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise PersistenceFailure(f"Payload no serializable para '{key}': {exc}") from exc
        updated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
        try:
            self._con.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value, updated_at),
            )
            self._con.commit()
        except sqlite3.Error as exc:
            self._rollback(key)
            raise PersistenceFailure(f"No se pudo escribir '{key}': {exc}") from exc
        LOGGER.debug("sqlite_key_saved key=%s", key)

    def _rollback(self, key: str) -> None:
        try:
            self._con.rollback()
        except sqlite3.Error as exc:
            LOGGER.warning("sqlite_rollback_failed key=%s error=%s", key, exc.__class__.__name__)

    def close(self) -> None:
        self._con.close()
