# infrastructure/sqlite/db.py
"""
Conexión y bootstrap de SQLite para el almacén clave-valor.

Notas:
- WAL mejora concurrencia (lecturas mientras se escribe).
- El schema es idempotente (CREATE IF NOT EXISTS) y se aplica al conectar.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

SCHEMA_KV = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def connect(db_path: str | Path) -> sqlite3.Connection:
    """
    Abre conexión SQLite y aplica PRAGMAs recomendados.

    ``":memory:"`` se admite para tests.
    """
    ruta = str(db_path)
    if ruta != ":memory:":
        Path(ruta).parent.mkdir(parents=True, exist_ok=True)
    con = sqlite3.connect(ruta)
    con.row_factory = sqlite3.Row
    _apply_pragmas(con)
    return con


def _apply_pragmas(con: sqlite3.Connection) -> None:
    """
    journal_mode=WAL:
    - Mejora concurrencia (muy útil en apps con UI).

    synchronous=NORMAL:
    - Buen equilibrio seguridad/rendimiento para apps de escritorio.
    """
    con.execute("PRAGMA journal_mode = WAL;")
    con.execute("PRAGMA synchronous = NORMAL;")
    con.execute("PRAGMA temp_store = MEMORY;")


def bootstrap(db_path: str | Path) -> sqlite3.Connection:
    con = connect(db_path)
    con.executescript(SCHEMA_KV)
    con.commit()
    return con
