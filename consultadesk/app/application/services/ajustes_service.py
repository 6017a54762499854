from __future__ import annotations

from consultadesk.app.application.services.almacen_clinico import AlmacenClinico, ResultadoGuardado
from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.domain.ajustes import AjustesClinica

LOGGER = get_logger(__name__)


class ServicioAjustes:
    """Membrete de la consulta (nombre, médico, dirección, pie de página)."""

    def __init__(self, almacen: AlmacenClinico, ajustes: AjustesClinica | None = None) -> None:
        self._almacen = almacen
        self._ajustes = ajustes or AjustesClinica()

    def current(self) -> AjustesClinica:
        return self._ajustes

    def update(
        self,
        nombre_clinica: str,
        nombre_medico: str,
        direccion: str,
        pie_pagina: str,
    ) -> ResultadoGuardado:
        self._ajustes = AjustesClinica(
            nombre_clinica=nombre_clinica,
            nombre_medico=nombre_medico,
            direccion=direccion,
            pie_pagina=pie_pagina,
        )
        resultado = self._almacen.save_settings(self._ajustes)
        LOGGER.info("settings_updated persisted=%s", resultado.persistido)
        return resultado
