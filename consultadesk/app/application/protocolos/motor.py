# application/protocolos/motor.py
"""
Sugerencia de protocolo a partir del diagnóstico (CDSS por keywords).

- ``match``: delega en un ``SeleccionProtocoloPort``; el de serie (``SelectorPorKeywords``)
  pasa a minúsculas y recorre la tabla en orden, primera coincidencia por subcadena;
  sin coincidencia devuelve DEFAULT. Nunca falla.
- ``apply``: consejos/pruebas se fusionan sin duplicar texto; las líneas del
  protocolo se añaden a la receta sin pasar por el control de alergias.
- ``request_suggestion``: la misma operación diferida a través de un planificador
  (latencia simulada), cancelable y con una sola solicitud pendiente a la vez.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from consultadesk.app.application.ports.planificador_port import PlanificadorPort, TareaProgramada
from consultadesk.app.application.ports.protocolos_port import SeleccionProtocoloPort
from consultadesk.app.application.protocolos.base_conocimiento import BaseConocimiento
from consultadesk.app.application.recetas.editor import EditorReceta
from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.domain.exceptions import NoActivePatientError, SuggestionInProgressError, ValidationError
from consultadesk.app.domain.farmacia import LineaReceta
from consultadesk.app.domain.protocolos import Protocolo
from consultadesk.app.domain.visitas import NotasClinicas

if TYPE_CHECKING:
    from consultadesk.app.application.visitas.sesion import SesionVisita

LOGGER = get_logger(__name__)

DELAY_MS_POR_DEFECTO = 1200


class EstadoSolicitud(str, Enum):
    PENDIENTE = "pendiente"
    COMPLETADA = "completada"
    CANCELADA = "cancelada"
    # La visita activa cambió antes de que venciera el temporizador.
    DESCARTADA = "descartada"


@dataclass(frozen=True, slots=True)
class ResultadoSugerencia:
    protocolo: Protocolo
    coincidencia: bool
    lineas_anadidas: Tuple[LineaReceta, ...] = ()


class SolicitudSugerencia:
    def __init__(self, diagnostico: str, visita_id: str) -> None:
        self.diagnostico = diagnostico
        self.visita_id = visita_id
        self.estado = EstadoSolicitud.PENDIENTE
        self.resultado: Optional[ResultadoSugerencia] = None
        self._tarea: Optional[TareaProgramada] = None

    @property
    def pendiente(self) -> bool:
        return self.estado == EstadoSolicitud.PENDIENTE

    def cancel(self) -> bool:
        """Cancela si aún no se ha resuelto; notas y receta quedan intactas."""
        if not self.pendiente:
            return False
        self.estado = EstadoSolicitud.CANCELADA
        if self._tarea is not None:
            self._tarea.cancel()
        LOGGER.info("protocol_suggestion_cancelled visit_id=%s", self.visita_id)
        return True


class SelectorPorKeywords(SeleccionProtocoloPort):
    """Tabla ordenada de reglas: primera keyword contenida en el diagnóstico."""

    def __init__(self, base: Optional[BaseConocimiento] = None) -> None:
        self._base = base or BaseConocimiento()

    @property
    def base(self) -> BaseConocimiento:
        return self._base

    def match(self, diagnostico: str) -> Protocolo:
        texto = (diagnostico or "").lower()
        for protocolo in self._base:
            if protocolo.coincide(texto):
                return protocolo
        return self._base.default


class MotorProtocolos:
    def __init__(
        self,
        planificador: PlanificadorPort,
        *,
        selector: Optional[SeleccionProtocoloPort] = None,
        delay_ms: int = DELAY_MS_POR_DEFECTO,
    ) -> None:
        self._planificador = planificador
        self._selector = selector or SelectorPorKeywords()
        self._delay_ms = max(0, int(delay_ms))
        self._pendiente: Optional[SolicitudSugerencia] = None

    @property
    def ocupado(self) -> bool:
        return self._pendiente is not None and self._pendiente.pendiente

    def match(self, diagnostico: str) -> Protocolo:
        return self._selector.match(diagnostico)

    def apply(self, protocolo: Protocolo, notas: NotasClinicas, editor: EditorReceta) -> List[LineaReceta]:
        notas.consejos = _fusionar_texto(notas.consejos, protocolo.consejos)
        notas.pruebas = _fusionar_texto(notas.pruebas, protocolo.pruebas)
        return editor.append_template(protocolo.rx)

    def request_suggestion(
        self,
        sesion: "SesionVisita",
        on_done: Optional[Callable[[ResultadoSugerencia], None]] = None,
    ) -> SolicitudSugerencia:
        if self.ocupado:
            raise SuggestionInProgressError("Ya hay una sugerencia en curso.")
        if sesion.visita is None:
            raise NoActivePatientError("Carga un paciente antes de pedir una sugerencia.")
        diagnostico = sesion.notas.diagnostico.strip()
        if not diagnostico:
            raise ValidationError("Introduce un diagnóstico para sugerir un protocolo.")
        visita_id = sesion.visita.id

        solicitud = SolicitudSugerencia(diagnostico, visita_id)
        self._pendiente = solicitud
        LOGGER.info("protocol_suggestion_requested visit_id=%s delay_ms=%s", visita_id, self._delay_ms)
        # Un planificador inmediato puede resolver la solicitud dentro de schedule().
        solicitud._tarea = self._planificador.schedule(
            self._delay_ms,
            lambda: self._completar(solicitud, sesion, on_done),
        )
        return solicitud

    def _completar(
        self,
        solicitud: SolicitudSugerencia,
        sesion: "SesionVisita",
        on_done: Optional[Callable[[ResultadoSugerencia], None]],
    ) -> None:
        if not solicitud.pendiente:
            return
        if self._pendiente is solicitud:
            self._pendiente = None
        visita_actual = sesion.visita.id if sesion.visita is not None else ""
        if visita_actual != solicitud.visita_id:
            solicitud.estado = EstadoSolicitud.DESCARTADA
            LOGGER.warning(
                "protocol_suggestion_discarded requested_visit=%s current_visit=%s",
                solicitud.visita_id,
                visita_actual or "-",
            )
            return

        protocolo = self.match(solicitud.diagnostico)
        lineas = self.apply(protocolo, sesion.notas, sesion.editor)
        resultado = ResultadoSugerencia(
            protocolo=protocolo,
            coincidencia=not protocolo.es_fallback,
            lineas_anadidas=tuple(lineas),
        )
        solicitud.resultado = resultado
        solicitud.estado = EstadoSolicitud.COMPLETADA
        LOGGER.info(
            "protocol_matched code=%s matched=%s rx_added=%s",
            protocolo.codigo,
            resultado.coincidencia,
            len(lineas),
        )
        if on_done is not None:
            on_done(resultado)


def _fusionar_texto(actual: str, texto: str) -> str:
    if not texto:
        return actual
    if not actual.strip():
        return texto
    if texto in actual:
        return actual
    return f"{actual}\n{texto}"
