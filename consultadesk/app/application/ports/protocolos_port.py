from __future__ import annotations

from typing import Protocol

from consultadesk.app.domain.protocolos import Protocolo


class SeleccionProtocoloPort(Protocol):
    """Contrato de selección de protocolo: nunca falla, sin coincidencia devuelve el DEFAULT."""

    def match(self, diagnostico: str) -> Protocolo:
        ...
