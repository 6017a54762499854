"""
Capa de commit entre el núcleo clínico y el almacén clave-valor.

Reglas:
- Los fallos de persistencia no son fatales: se registran como soft exception
  y se devuelven como aviso; el estado en memoria sigue siendo el autoritativo.
- Una carga corrupta o ausente arranca con colecciones vacías.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from consultadesk.app.application.ports.persistencia_port import (
    CLAVE_AJUSTES,
    CLAVE_CATALOGO_FARMACOS,
    CLAVE_PACIENTES,
    CLAVE_VISITAS,
    PersistenceFailure,
    PersistenciaPort,
)
from consultadesk.app.bootstrap_logging import get_logger, log_soft_exception
from consultadesk.app.domain.ajustes import AjustesClinica
from consultadesk.app.domain.personas import Paciente
from consultadesk.app.domain.visitas import Visita

LOGGER = get_logger(__name__)

AVISO_PERSISTENCIA = "No se pudo guardar en disco. Los datos siguen en memoria; vuelve a guardar."


@dataclass(frozen=True, slots=True)
class ResultadoGuardado:
    persistido: bool
    aviso: Optional[str] = None
    visita_id: Optional[str] = None


@dataclass(slots=True)
class EstadoPersistido:
    pacientes: List[Paciente] = field(default_factory=list)
    visitas: List[Visita] = field(default_factory=list)
    ajustes: AjustesClinica = field(default_factory=AjustesClinica)
    avisos: List[str] = field(default_factory=list)


class AlmacenClinico:
    def __init__(self, gateway: PersistenciaPort) -> None:
        self._gateway = gateway

    def load_state(self) -> EstadoPersistido:
        estado = EstadoPersistido()
        pacientes_raw = self._load_list(CLAVE_PACIENTES, estado)
        visitas_raw = self._load_list(CLAVE_VISITAS, estado)
        estado.pacientes = [Paciente.from_dict(item) for item in pacientes_raw if isinstance(item, dict)]
        estado.visitas = [Visita.from_dict(item) for item in visitas_raw if isinstance(item, dict)]
        ajustes_raw = self._load_raw(CLAVE_AJUSTES, estado)
        if isinstance(ajustes_raw, dict):
            estado.ajustes = AjustesClinica.from_dict(ajustes_raw)
        LOGGER.info(
            "data_loaded patients=%s visits=%s",
            len(estado.pacientes),
            len(estado.visitas),
        )
        return estado

    def commit(
        self,
        pacientes: Iterable[Paciente],
        visitas: Iterable[Visita],
        ajustes: AjustesClinica,
        *,
        visita_id: Optional[str] = None,
    ) -> ResultadoGuardado:
        try:
            self._gateway.save(CLAVE_PACIENTES, [p.to_dict() for p in pacientes])
            self._gateway.save(CLAVE_VISITAS, [v.to_dict() for v in visitas])
            self._gateway.save(CLAVE_AJUSTES, ajustes.to_dict())
        except PersistenceFailure as exc:
            log_soft_exception(LOGGER, exc, {"operation": "commit", "visit": visita_id or "-"})
            return ResultadoGuardado(persistido=False, aviso=AVISO_PERSISTENCIA, visita_id=visita_id)
        return ResultadoGuardado(persistido=True, visita_id=visita_id)

    def save_settings(self, ajustes: AjustesClinica) -> ResultadoGuardado:
        try:
            self._gateway.save(CLAVE_AJUSTES, ajustes.to_dict())
        except PersistenceFailure as exc:
            log_soft_exception(LOGGER, exc, {"operation": "save_settings"})
            return ResultadoGuardado(persistido=False, aviso=AVISO_PERSISTENCIA)
        return ResultadoGuardado(persistido=True)

    def load_drug_catalog(self) -> Any:
        """Payload crudo del catálogo de fármacos; None si no existe o no se puede leer."""
        try:
            return self._gateway.load(CLAVE_CATALOGO_FARMACOS)
        except PersistenceFailure as exc:
            log_soft_exception(LOGGER, exc, {"operation": "load", "key": CLAVE_CATALOGO_FARMACOS})
            return None

    def _load_raw(self, key: str, estado: EstadoPersistido) -> Any:
        try:
            return self._gateway.load(key)
        except PersistenceFailure as exc:
            log_soft_exception(LOGGER, exc, {"operation": "load", "key": key})
            estado.avisos.append(f"No se pudieron cargar los registros ({key}).")
            return None

    def _load_list(self, key: str, estado: EstadoPersistido) -> list[Any]:
        raw = self._load_raw(key, estado)
        if raw is None:
            return []
        if not isinstance(raw, list):
            LOGGER.warning("data_load_invalid key=%s expected=list", key)
            estado.avisos.append(f"Formato inválido en {key}; se ignora.")
            return []
        return raw
