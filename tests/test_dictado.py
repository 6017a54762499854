from __future__ import annotations

import pytest

from consultadesk.app.domain.enums import CampoNota


@pytest.fixture()
def dictado(container, paciente):
    container.sesion.load_patient_context(paciente)
    return container.dictado


def test_start_activates_single_field(dictado) -> None:
    dictado.start("motivo")
    dictado.start(CampoNota.DIAGNOSTICO)

    assert dictado.grabando
    assert dictado.campo_activo == CampoNota.DIAGNOSTICO


def test_deliver_appends_with_space_separator(dictado, container) -> None:
    token = dictado.start("motivo")

    assert dictado.deliver(token, "fever since")
    assert dictado.deliver(token, " two days ")

    assert container.sesion.notas.motivo == "fever since two days"


def test_result_after_stop_is_still_accepted(dictado, container) -> None:
    token = dictado.start("exploracion")
    dictado.stop()

    assert not dictado.grabando
    assert dictado.deliver(token, "chest clear")
    assert container.sesion.notas.exploracion == "chest clear"


def test_stale_token_is_ignored(dictado, container) -> None:
    antiguo = dictado.start("motivo")
    nuevo = dictado.start("diagnostico")

    assert nuevo != antiguo
    assert not dictado.deliver(antiguo, "texto tardío")
    assert container.sesion.notas.motivo == ""
    assert container.sesion.notas.diagnostico == ""


def test_empty_result_is_ignored(dictado, container) -> None:
    token = dictado.start("consejos")

    assert not dictado.deliver(token, "   ")
    assert container.sesion.notas.consejos == ""


def test_unknown_field_is_rejected(dictado) -> None:
    with pytest.raises(ValueError):
        dictado.start("vitals")
