from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from consultadesk.app.application.dictado import DictadoVoz
from consultadesk.app.application.documentos.documento_visita import GeneradorDocumento
from consultadesk.app.application.pacientes.registro import RegistroPacientes
from consultadesk.app.application.ports.persistencia_port import PersistenciaPort
from consultadesk.app.application.ports.planificador_port import PlanificadorPort
from consultadesk.app.application.protocolos.motor import DELAY_MS_POR_DEFECTO, MotorProtocolos
from consultadesk.app.application.recetas.catalogo import CatalogoFarmacos
from consultadesk.app.application.recetas.editor import EditorReceta
from consultadesk.app.application.services.ajustes_service import ServicioAjustes
from consultadesk.app.application.services.almacen_clinico import AlmacenClinico
from consultadesk.app.application.visitas.sesion import SesionVisita
from consultadesk.app.bootstrap_logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class AppContainer:
    """Estado completo de la aplicación; una única instancia por proceso."""

    gateway: PersistenciaPort
    almacen: AlmacenClinico
    registro: RegistroPacientes
    editor: EditorReceta
    catalogo: CatalogoFarmacos
    ajustes: ServicioAjustes
    sesion: SesionVisita
    motor: MotorProtocolos
    dictado: DictadoVoz
    documentos: GeneradorDocumento
    avisos_carga: List[str] = field(default_factory=list)

    def close(self) -> None:
        cerrar = getattr(self.gateway, "close", None)
        if callable(cerrar):
            cerrar()


def build_container(
    gateway: PersistenciaPort,
    planificador: PlanificadorPort,
    *,
    delay_ms: int = DELAY_MS_POR_DEFECTO,
) -> AppContainer:
    almacen = AlmacenClinico(gateway)
    estado = almacen.load_state()

    registro = RegistroPacientes(estado.pacientes)
    editor = EditorReceta()
    ajustes = ServicioAjustes(almacen, estado.ajustes)
    sesion = SesionVisita(registro, editor, almacen, ajustes, visitas=estado.visitas)
    motor = MotorProtocolos(planificador, delay_ms=delay_ms)

    for aviso in estado.avisos:
        LOGGER.warning("startup_load_warning detail=%s", aviso)

    return AppContainer(
        gateway=gateway,
        almacen=almacen,
        registro=registro,
        editor=editor,
        catalogo=CatalogoFarmacos.from_payload(almacen.load_drug_catalog()),
        ajustes=ajustes,
        sesion=sesion,
        motor=motor,
        dictado=DictadoVoz(sesion),
        documentos=GeneradorDocumento(sesion, ajustes),
        avisos_carga=list(estado.avisos),
    )
