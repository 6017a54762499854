from __future__ import annotations

import json
from typing import Any, Dict

from consultadesk.app.application.ports.persistencia_port import PersistenceFailure, PersistenciaPort


class GatewayMemoria(PersistenciaPort):
    """
    Almacén en memoria para tests y ejecución sin disco.

    Guarda el JSON serializado para que cada ``load`` devuelva una copia
    independiente, igual que un almacén real.
    """

    def __init__(self) -> None:
        self._datos: Dict[str, str] = {}
        self.fallar_escrituras = False

    def load(self, key: str) -> Any | None:
        raw = self._datos.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise PersistenceFailure(f"Valor corrupto en '{key}': {exc}") from exc

    def save(self, key: str, payload: Any) -> None:
        if self.fallar_escrituras:
            raise PersistenceFailure(f"Escritura rechazada para '{key}'.")
        try:
            self._datos[key] = json.dumps(payload, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise PersistenceFailure(f"Payload no serializable para '{key}': {exc}") from exc

    def put_raw(self, key: str, raw: str) -> None:
        """Inyecta contenido crudo (p. ej. JSON corrupto) para simular datos dañados."""
        self._datos[key] = raw

    def keys(self) -> list[str]:
        return sorted(self._datos)
