from __future__ import annotations

from typing import Any, Protocol

CLAVE_PACIENTES = "consultadesk_patients_v2"
CLAVE_VISITAS = "consultadesk_visits_v2"
CLAVE_AJUSTES = "consultadesk_settings_v2"
# Catálogo de fármacos para autocompletado; solo lectura, lo provee la instalación.
CLAVE_CATALOGO_FARMACOS = "consultadesk_drug_catalog"


class PersistenceFailure(RuntimeError):
    """El almacén no pudo completar la lectura/escritura (no se modelan escrituras parciales)."""


class PersistenciaPort(Protocol):
    """Contrato clave-valor para el almacenamiento local de pacientes, visitas y ajustes."""

    def load(self, key: str) -> Any | None:
        """Devuelve el payload JSON almacenado o None si la clave no existe."""

    def save(self, key: str, payload: Any) -> None:
        """Persiste el payload completo; lanza PersistenceFailure si falla."""
