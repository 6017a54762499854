from __future__ import annotations

from typing import Any, Iterable, List

from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.common.search_utils import contains_folded

LOGGER = get_logger(__name__)

MIN_CARACTERES_BUSQUEDA = 2
MAX_SUGERENCIAS = 15


class CatalogoFarmacos:
    """Autocompletado de nombres de fármaco sobre un listado local opcional."""

    def __init__(self, nombres: Iterable[str] = ()) -> None:
        vistos: set[str] = set()
        self._nombres: List[str] = []
        for nombre in nombres:
            limpio = (nombre or "").strip()
            if limpio and limpio not in vistos:
                vistos.add(limpio)
                self._nombres.append(limpio)

    @classmethod
    def from_payload(cls, payload: Any) -> "CatalogoFarmacos":
        """Acepta una lista de cadenas o de objetos ``{"name": ...}``; cualquier otra cosa da catálogo vacío."""
        if not isinstance(payload, list):
            if payload is not None:
                LOGGER.warning("drug_catalog_invalid expected=list")
            return cls()
        nombres: List[str] = []
        for item in payload:
            if isinstance(item, str):
                nombres.append(item)
            elif isinstance(item, dict) and isinstance(item.get("name"), str):
                nombres.append(item["name"])
        return cls(nombres)

    def search(self, query: str | None) -> List[str]:
        texto = (query or "").strip()
        if len(texto) < MIN_CARACTERES_BUSQUEDA:
            return []
        resultados: List[str] = []
        for nombre in self._nombres:
            if contains_folded(nombre, texto):
                resultados.append(nombre)
                if len(resultados) == MAX_SUGERENCIAS:
                    break
        return resultados

    def __len__(self) -> int:
        return len(self._nombres)
