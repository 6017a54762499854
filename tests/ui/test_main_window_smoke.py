from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
try:
    from PySide6.QtWidgets import QApplication
except ImportError as exc:  # pragma: no cover - depende del sistema
    pytest.skip(f"PySide6 no disponible: {exc}", allow_module_level=True)

from consultadesk.app.container import build_container
from consultadesk.app.domain.enums import CampoNota
from consultadesk.app.infrastructure.persistencia.memoria import GatewayMemoria
from consultadesk.app.infrastructure.planificacion import PlanificadorInmediato
from consultadesk.app.ui.main_window import MainWindow
from consultadesk.app.ui.widgets.toast import GestorToasts


@pytest.fixture(scope="session")
def qapp() -> Iterator[QApplication]:
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def ventana(qapp: QApplication) -> MainWindow:
    del qapp
    container = build_container(GatewayMemoria(), PlanificadorInmediato(), delay_ms=0)
    return MainWindow(container, GestorToasts())


def test_main_window_arranca_sin_paciente(ventana: MainWindow) -> None:
    assert ventana.lbl_paciente.text() == "Sin paciente seleccionado"
    assert not ventana.btn_guardar.isEnabled()
    assert not ventana.btn_sugerir.isEnabled()
    assert ventana.tabla_rx.rowCount() == 0


def test_main_window_busqueda_y_carga_de_paciente(ventana: MainWindow) -> None:
    paciente = ventana.container.registro.register(nombre="Asha Verma", edad="52", sexo="F", alergias="Penicillin")

    ventana.txt_buscar.setText("asha")
    assert ventana.lst_resultados.count() == 1

    ventana._on_resultado_elegido(ventana.lst_resultados.item(0))

    assert ventana.container.sesion.paciente is paciente
    assert paciente.id in ventana.lbl_paciente.text()
    assert not ventana.lbl_banner.isHidden()
    assert ventana.lbl_banner.text() == "ALLERGY: Penicillin"
    assert ventana.btn_guardar.isEnabled()


def test_main_window_rx_sugerencia_y_guardado(ventana: MainWindow) -> None:
    container = ventana.container
    ventana._cargar_paciente(container.registro.register(nombre="Ravi Kumar"))

    ventana.txt_farmaco.setText("Tab. Pantoprazole 40mg")
    ventana.txt_dosis.setText("1 Tab")
    ventana._on_anadir_rx()
    assert ventana.tabla_rx.rowCount() == 1
    assert ventana.txt_farmaco.text() == ""

    ventana._notas[CampoNota.DIAGNOSTICO].setPlainText("Essential Hypertension")
    ventana._on_sugerir()

    assert ventana.tabla_rx.rowCount() == 3
    assert "Salt restriction" in ventana._notas[CampoNota.CONSEJOS].toPlainText()
    assert ventana.lbl_sugerencia.text() == "Essential Hypertension (Stage 1)"

    ventana._on_guardar()

    assert len(container.sesion.visitas) == 1
    assert ventana.toasts.notificaciones[-1]["message"] == "Visita guardada."


def test_main_window_dictado_escribe_en_campo_activo(ventana: MainWindow) -> None:
    container = ventana.container
    ventana._cargar_paciente(container.registro.register(nombre="Meera"))

    ventana._microfonos[CampoNota.MOTIVO].setChecked(True)
    ventana.dictado_resultado.emit(1, "fever since two days")

    assert container.sesion.notas.motivo == "fever since two days"
    assert ventana._notas[CampoNota.MOTIVO].toPlainText() == "fever since two days"
