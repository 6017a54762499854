from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, List, Optional

from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.common.identificadores import GeneradorId, generate_id, generate_unique_id
from consultadesk.app.common.search_utils import contains_folded, normalize_search_text
from consultadesk.app.domain.personas import Paciente

LOGGER = get_logger(__name__)

MAX_RESULTADOS_BUSQUEDA = 10
PREFIJO_PACIENTE = "P"


class RegistroPacientes:
    """
    Colección de pacientes de la consulta (propietaria exclusiva).

    - Alta sin comprobar duplicados de nombre/teléfono.
    - Búsqueda por subcadena en orden de registro (sin ranking).
    - No hay edición de ficha: solo la instantánea de alergias/crónicos al guardar visita.
    """

    def __init__(
        self,
        pacientes: Iterable[Paciente] = (),
        *,
        reloj: Callable[[], datetime] = datetime.now,
        generar_id: GeneradorId = generate_id,
    ) -> None:
        self._pacientes: List[Paciente] = []
        self._ids: set[str] = set()
        self._reloj = reloj
        self._generar_id = generar_id
        self.load_all(pacientes)

    def register(
        self,
        nombre: str,
        telefono: str = "",
        edad: str = "",
        sexo: str = "",
        alergias: str = "",
        cronicos: str = "",
    ) -> Paciente:
        paciente = Paciente(
            nombre=nombre,
            telefono=telefono,
            edad=edad,
            sexo=sexo,
            alergias=alergias,
            cronicos=cronicos,
        )
        paciente.validar()
        paciente.id = generate_unique_id(PREFIJO_PACIENTE, self._ids, self._generar_id)
        paciente.registrado_en = self._reloj().isoformat(timespec="seconds")
        self._append(paciente)
        LOGGER.info("patient_registered patient_id=%s total=%s", paciente.id, len(self._pacientes))
        return paciente

    def search(self, query: Optional[str]) -> List[Paciente]:
        texto = normalize_search_text(query)
        if texto is None:
            return []
        resultados: List[Paciente] = []
        for paciente in self._pacientes:
            if (
                contains_folded(paciente.nombre, texto)
                or contains_folded(paciente.telefono, texto)
                or contains_folded(paciente.id, texto)
            ):
                resultados.append(paciente)
                if len(resultados) == MAX_RESULTADOS_BUSQUEDA:
                    break
        return resultados

    def update_snapshot(self, paciente: Paciente, alergias: Optional[str], cronicos: Optional[str]) -> None:
        paciente.alergias = (alergias or "").strip()
        paciente.cronicos = (cronicos or "").strip()

    def get_by_id(self, paciente_id: str) -> Optional[Paciente]:
        for paciente in self._pacientes:
            if paciente.id == paciente_id:
                return paciente
        return None

    def list_all(self) -> List[Paciente]:
        return list(self._pacientes)

    def load_all(self, pacientes: Iterable[Paciente]) -> None:
        """Hidrata desde persistencia; ignora registros sin id o con id repetido."""
        for paciente in pacientes:
            if not paciente.id or paciente.id in self._ids:
                LOGGER.warning("patient_skipped_on_load reason=missing_or_duplicate_id")
                continue
            self._append(paciente)

    def __len__(self) -> int:
        return len(self._pacientes)

    def _append(self, paciente: Paciente) -> None:
        self._pacientes.append(paciente)
        self._ids.add(paciente.id)
