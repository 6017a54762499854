# application/visitas/sesion.py
"""
Sesión de visita del paciente activo.

Máquina de estados:
- UNLOADED: sin paciente (arranque o contexto limpiado).
- DRAFT: ``load_patient_context(paciente)`` crea una visita nueva (id fresco, fecha actual,
  notas/constantes vacías) y vacía el editor de receta. Los cambios no guardados se descartan.
- SAVED: ``save()`` vuelca notas, constantes y una copia de la receta, marca ``saved``,
  hace upsert por id y persiste.
- HISTORY: ``load_history_visit(visita)`` sobrescribe el formulario con la visita histórica
  reutilizando su id/estado; un ``save()`` posterior sobrescribe ese registro.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Tuple, Union

from consultadesk.app.application.pacientes.registro import RegistroPacientes
from consultadesk.app.application.recetas.editor import EditorReceta
from consultadesk.app.application.services.ajustes_service import ServicioAjustes
from consultadesk.app.application.services.almacen_clinico import AlmacenClinico, ResultadoGuardado
from consultadesk.app.bootstrap_logging import get_logger, set_visit_context
from consultadesk.app.common.identificadores import GeneradorId, generate_id, generate_unique_id
from consultadesk.app.domain.enums import CampoNota, EstadoSesion, EstadoVisita
from consultadesk.app.domain.exceptions import NoActivePatientError, ValidationError
from consultadesk.app.domain.imc import ResultadoIMC, calcular_imc
from consultadesk.app.domain.personas import Paciente
from consultadesk.app.domain.visitas import ConstantesVitales, NotasClinicas, Visita

LOGGER = get_logger(__name__)

PREFIJO_VISITA = "V"
MARCA_IMC = "BMI:"


class SesionVisita:
    def __init__(
        self,
        registro: RegistroPacientes,
        editor: EditorReceta,
        almacen: AlmacenClinico,
        ajustes: ServicioAjustes,
        *,
        visitas: Iterable[Visita] = (),
        reloj: Callable[[], datetime] = datetime.now,
        generar_id: GeneradorId = generate_id,
    ) -> None:
        self._registro = registro
        self._editor = editor
        self._almacen = almacen
        self._ajustes = ajustes
        self._reloj = reloj
        self._generar_id = generar_id
        self._visitas: List[Visita] = [v for v in visitas if v.id]

        self._paciente: Optional[Paciente] = None
        self._visita: Optional[Visita] = None
        self._estado = EstadoSesion.UNLOADED
        self.notas = NotasClinicas()
        self.constantes = ConstantesVitales()
        self.fecha_visita = ""
        self.alergias_snapshot = ""
        self.cronicos_snapshot = ""

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    @property
    def estado(self) -> EstadoSesion:
        return self._estado

    @property
    def paciente(self) -> Optional[Paciente]:
        return self._paciente

    @property
    def visita(self) -> Optional[Visita]:
        return self._visita

    @property
    def editor(self) -> EditorReceta:
        return self._editor

    @property
    def visitas(self) -> Tuple[Visita, ...]:
        return tuple(self._visitas)

    def history_for_current_patient(self) -> List[Visita]:
        """Visitas guardadas del paciente activo, de la más reciente a la más antigua."""
        if self._paciente is None:
            return []
        propias = [
            v for v in self._visitas
            if v.paciente_id == self._paciente.id and v.estado == EstadoVisita.SAVED
        ]
        return sorted(propias, key=lambda v: v.fecha, reverse=True)

    # ------------------------------------------------------------------
    # Transiciones
    # ------------------------------------------------------------------

    def load_patient_context(self, paciente: Optional[Paciente]) -> None:
        self._paciente = paciente
        self._reset_forms()
        if paciente is None:
            self._visita = None
            self._estado = EstadoSesion.UNLOADED
            self._editor.set_alergias_paciente("")
            set_visit_context(None)
            LOGGER.info("patient_context_cleared")
            return

        self.alergias_snapshot = paciente.alergias
        self.cronicos_snapshot = paciente.cronicos
        self._editor.set_alergias_paciente(paciente.alergias)
        ahora = self._reloj()
        self._visita = Visita(
            id=generate_unique_id(PREFIJO_VISITA, {v.id for v in self._visitas}, self._generar_id),
            paciente_id=paciente.id,
            fecha=ahora.isoformat(timespec="seconds"),
            estado=EstadoVisita.DRAFT,
        )
        self.fecha_visita = self._visita.fecha
        self._estado = EstadoSesion.DRAFT
        set_visit_context(self._visita.id)
        LOGGER.info("patient_context_loaded patient_id=%s visit_id=%s", paciente.id, self._visita.id)

    def load_history_visit(self, visita: Visita) -> None:
        if self._paciente is None:
            raise NoActivePatientError("No hay paciente activo para cargar su historial.")
        if visita.paciente_id != self._paciente.id:
            raise ValidationError("La visita pertenece a otro paciente.")
        historica = visita.copia()
        self._visita = historica
        self.fecha_visita = historica.fecha
        self.notas = historica.notas.copia()
        self.constantes = historica.constantes.copia()
        self._editor.replace_all(historica.rx)
        self._estado = EstadoSesion.HISTORY
        set_visit_context(historica.id)
        LOGGER.info("history_visit_loaded visit_id=%s", historica.id)

    def save(self) -> ResultadoGuardado:
        paciente = self._paciente
        visita = self._visita
        if paciente is None or visita is None:
            raise NoActivePatientError("No hay paciente activo.")

        visita.fecha = self.fecha_visita or self._reloj().isoformat(timespec="seconds")
        visita.notas = self.notas.copia()
        visita.constantes = self.constantes.copia()
        visita.rx = self._editor.snapshot()
        visita.estado = EstadoVisita.SAVED

        self._registro.update_snapshot(paciente, self.alergias_snapshot, self.cronicos_snapshot)
        self._editor.set_alergias_paciente(paciente.alergias)

        if self._estado == EstadoSesion.HISTORY:
            LOGGER.warning("visit_resaved_from_history visit_id=%s", visita.id)
        almacenada = visita.copia()
        self._visitas = [v for v in self._visitas if v.id != almacenada.id]
        self._visitas.append(almacenada)
        self._estado = EstadoSesion.SAVED

        resultado = self._almacen.commit(
            self._registro.list_all(),
            self._visitas,
            self._ajustes.current(),
            visita_id=visita.id,
        )
        LOGGER.info(
            "visit_saved visit_id=%s rx_count=%s persisted=%s",
            visita.id,
            len(almacenada.rx),
            resultado.persistido,
        )
        return resultado

    # ------------------------------------------------------------------
    # Edición del formulario
    # ------------------------------------------------------------------

    def set_visit_date(self, fecha: Union[str, date]) -> None:
        self.fecha_visita = fecha.isoformat() if isinstance(fecha, date) else fecha.strip()

    def insert_macro(self, campo: Union[str, CampoNota], texto: str) -> str:
        """Añade un texto predefinido en una línea nueva del campo de notas."""
        nombre = _campo_nota(campo)
        actual = getattr(self.notas, nombre)
        nuevo = f"{actual}\n{texto}" if actual else texto
        setattr(self.notas, nombre, nuevo)
        return nuevo

    def apply_bmi(self) -> ResultadoIMC:
        """
        Calcula el IMC con peso/talla actuales y lo anota en consejos una sola vez.

        Lanza ValidationError si peso o talla no son válidos.
        """
        resultado = calcular_imc(self.constantes.peso, self.constantes.talla)
        if resultado is None:
            raise ValidationError("Introduce peso (kg) y talla (cm) válidos.")
        if MARCA_IMC not in self.notas.consejos:
            separador = "\n\n" if self.notas.consejos else ""
            self.notas.consejos = f"{self.notas.consejos}{separador}[Calculated] {resultado.texto()}"
        return resultado

    def load_visits(self, visitas: Iterable[Visita]) -> None:
        for visita in visitas:
            if not visita.id:
                continue
            self._visitas = [v for v in self._visitas if v.id != visita.id]
            self._visitas.append(visita)

    def _reset_forms(self) -> None:
        self.notas = NotasClinicas()
        self.constantes = ConstantesVitales()
        self.fecha_visita = ""
        self.alergias_snapshot = ""
        self.cronicos_snapshot = ""
        self._editor.clear()


def _campo_nota(campo: Union[str, CampoNota]) -> str:
    try:
        return CampoNota(campo).value
    except ValueError as exc:
        raise ValidationError(f"Campo de notas desconocido: {campo}.") from exc
