# application/recetas/editor.py
"""
Editor de la lista de prescripción (Rx) de la visita activa.

Reglas:
- El orden de inserción es el orden de la receta impresa.
- Una sola línea en modo edición: ``begin_edit`` abandona cualquier buffer anterior.
- ``add`` con edición activa actualiza en sitio (mismo id, misma posición);
  sin edición añade al final con id nuevo, pasando antes por el control de alergias.
- Las líneas de protocolo se añaden siempre al final y no pasan por el control
  de alergias (aplicación en bloque no bloqueante).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.common.identificadores import GeneradorId, generate_id, generate_unique_id
from consultadesk.app.domain.alergias import ComprobadorAlergias
from consultadesk.app.domain.exceptions import AllergyConfirmationRequired
from consultadesk.app.domain.farmacia import LineaReceta, set_dosage_form
from consultadesk.app.domain.protocolos import LineaProtocolo

LOGGER = get_logger(__name__)

PREFIJO_RX = "RX"
PREFIJO_RX_PROTOCOLO = "AI-RX"


@dataclass(slots=True)
class BorradorLinea:
    """Contenido del formulario de línea (sin id)."""

    farmaco: str = ""
    dosis: str = ""
    frecuencia: str = ""
    duracion: str = ""
    observaciones: str = ""

    @classmethod
    def desde_linea(cls, linea: LineaReceta) -> "BorradorLinea":
        return cls(
            farmaco=linea.farmaco,
            dosis=linea.dosis,
            frecuencia=linea.frecuencia,
            duracion=linea.duracion,
            observaciones=linea.observaciones,
        )

    def to_linea(self, linea_id: str) -> LineaReceta:
        linea = LineaReceta(
            id=linea_id,
            farmaco=self.farmaco,
            dosis=self.dosis,
            frecuencia=self.frecuencia,
            duracion=self.duracion,
            observaciones=self.observaciones,
        )
        linea.validar()
        return linea


class EditorReceta:
    def __init__(
        self,
        comprobador: Optional[ComprobadorAlergias] = None,
        *,
        generar_id: GeneradorId = generate_id,
    ) -> None:
        self._comprobador = comprobador or ComprobadorAlergias()
        self._generar_id = generar_id
        self._lineas: List[LineaReceta] = []
        self._editing_id: Optional[str] = None
        self._buffer = BorradorLinea()
        self._alergias_paciente = ""

    # ------------------------------------------------------------------
    # Consultas (modelo pull para la capa de presentación)
    # ------------------------------------------------------------------

    @property
    def items(self) -> Tuple[LineaReceta, ...]:
        return tuple(self._lineas)

    @property
    def editing_id(self) -> Optional[str]:
        return self._editing_id

    @property
    def edit_buffer(self) -> BorradorLinea:
        return self._buffer

    @property
    def alergias_paciente(self) -> str:
        return self._alergias_paciente

    def snapshot(self) -> List[LineaReceta]:
        return [linea.copia() for linea in self._lineas]

    def get(self, linea_id: str) -> Optional[LineaReceta]:
        idx = self._index_of(linea_id)
        return None if idx is None else self._lineas[idx]

    def __len__(self) -> int:
        return len(self._lineas)

    # ------------------------------------------------------------------
    # Mutaciones
    # ------------------------------------------------------------------

    def set_alergias_paciente(self, alergias: Optional[str]) -> None:
        self._alergias_paciente = alergias or ""

    def add(self, borrador: Optional[BorradorLinea] = None, *, confirmar_alergia: bool = False) -> Optional[LineaReceta]:
        """
        Confirma el buffer (o ``borrador``) en la lista.

        Lanza ValidationError si el fármaco está vacío y AllergyConfirmationRequired
        si hay conflicto de alergia sin confirmación; en ambos casos la lista no cambia.
        Devuelve None solo si la línea en edición ya no existe.
        """
        origen = replace(borrador) if borrador is not None else replace(self._buffer)
        if self._editing_id is not None:
            return self._commit_edit(self._editing_id, origen)

        linea = origen.to_linea(linea_id="")
        if self._comprobador.check(linea.farmaco, self._alergias_paciente) and not confirmar_alergia:
            LOGGER.warning("rx_allergy_conflict rx_count=%s", len(self._lineas))
            raise AllergyConfirmationRequired(linea.farmaco, self._alergias_paciente)
        if confirmar_alergia:
            LOGGER.warning("rx_allergy_override rx_count=%s", len(self._lineas))

        linea.id = self._nuevo_id(PREFIJO_RX)
        self._lineas.append(linea)
        self._buffer = BorradorLinea()
        LOGGER.info("rx_item_added rx_id=%s rx_count=%s", linea.id, len(self._lineas))
        return linea

    def begin_edit(self, linea_id: str) -> bool:
        linea = self.get(linea_id)
        if linea is None:
            return False
        self._buffer = BorradorLinea.desde_linea(linea)
        self._editing_id = linea_id
        return True

    def cancel_edit(self) -> None:
        self._editing_id = None
        self._buffer = BorradorLinea()

    def delete(self, linea_id: str) -> bool:
        idx = self._index_of(linea_id)
        if idx is None:
            return False
        del self._lineas[idx]
        if self._editing_id == linea_id:
            self.cancel_edit()
        LOGGER.info("rx_item_deleted rx_id=%s rx_count=%s", linea_id, len(self._lineas))
        return True

    def clear(self) -> None:
        self._lineas = []
        self.cancel_edit()

    def replace_all(self, lineas: Iterable[LineaReceta]) -> None:
        self._lineas = [linea.copia() for linea in lineas]
        self.cancel_edit()

    def append_template(self, plantilla: Iterable[LineaProtocolo]) -> List[LineaReceta]:
        nuevas: List[LineaReceta] = []
        for item in plantilla:
            linea = item.to_linea_receta(self._nuevo_id(PREFIJO_RX_PROTOCOLO))
            self._lineas.append(linea)
            nuevas.append(linea)
        if nuevas:
            LOGGER.info("rx_appended_from_protocol rx_added=%s allergy_check=skipped", len(nuevas))
        return nuevas

    def apply_dosage_form(self, forma: str) -> str:
        """Atajo de forma farmacéutica sobre el buffer de edición."""
        self._buffer.farmaco = set_dosage_form(self._buffer.farmaco, forma)
        return self._buffer.farmaco

    # ------------------------------------------------------------------

    def _commit_edit(self, editing_id: str, origen: BorradorLinea) -> Optional[LineaReceta]:
        linea = origen.to_linea(linea_id=editing_id)
        idx = self._index_of(editing_id)
        if idx is None:
            LOGGER.warning("rx_edit_target_missing rx_id=%s", editing_id)
            self.cancel_edit()
            return None
        self._lineas[idx] = linea
        self.cancel_edit()
        LOGGER.info("rx_item_updated rx_id=%s", editing_id)
        return linea

    def _index_of(self, linea_id: str) -> Optional[int]:
        for idx, linea in enumerate(self._lineas):
            if linea.id == linea_id:
                return idx
        return None

    def _nuevo_id(self, prefijo: str) -> str:
        return generate_unique_id(prefijo, {linea.id for linea in self._lineas}, self._generar_id)
