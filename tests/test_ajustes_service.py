from __future__ import annotations

from consultadesk.app.application.ports.persistencia_port import CLAVE_AJUSTES
from consultadesk.app.application.services.ajustes_service import ServicioAjustes
from consultadesk.app.application.services.almacen_clinico import AlmacenClinico
from consultadesk.app.domain.ajustes import AjustesClinica


def test_current_defaults_to_letterhead_defaults(gateway) -> None:
    servicio = ServicioAjustes(AlmacenClinico(gateway))

    assert servicio.current() == AjustesClinica()
    assert servicio.current().nombre_medico == "Dr. Yusuf Abbas"


def test_update_replaces_settings_and_persists(gateway) -> None:
    servicio = ServicioAjustes(AlmacenClinico(gateway))

    resultado = servicio.update("Clínica Norte", "Dr. Meera Iyer", "Calle 1", "Gracias")

    assert resultado.persistido
    assert servicio.current().nombre_clinica == "Clínica Norte"
    assert gateway.load(CLAVE_AJUSTES)["nombre_medico"] == "Dr. Meera Iyer"


def test_update_keeps_new_settings_in_memory_when_store_fails(gateway) -> None:
    servicio = ServicioAjustes(AlmacenClinico(gateway))
    gateway.fallar_escrituras = True

    resultado = servicio.update("Clínica Norte", "Dr. Meera Iyer", "", "")

    assert not resultado.persistido
    assert resultado.aviso
    assert servicio.current().nombre_clinica == "Clínica Norte"
