from __future__ import annotations

import pytest

from consultadesk.app.application.protocolos.base_conocimiento import PROTOCOLO_DEFAULT, PROTOCOLOS, BaseConocimiento
from consultadesk.app.application.protocolos.motor import EstadoSolicitud, MotorProtocolos
from consultadesk.app.application.recetas.editor import BorradorLinea, EditorReceta
from consultadesk.app.container import build_container
from consultadesk.app.domain.exceptions import NoActivePatientError, SuggestionInProgressError, ValidationError
from consultadesk.app.domain.visitas import NotasClinicas
from consultadesk.app.infrastructure.planificacion import PlanificadorInmediato

CONSEJOS_HTN = "Salt restriction (<5g/day). 30 mins aerobic exercise daily. Monthly BP Charting. Avoid stress."
PRUEBAS_HTN = "Lipid Profile, Serum Creatinine, ECG, Urine Routine."


@pytest.fixture()
def motor() -> MotorProtocolos:
    return MotorProtocolos(PlanificadorInmediato(), delay_ms=0)


@pytest.fixture()
def container_manual(gateway, planificador_manual):
    return build_container(gateway, planificador_manual, delay_ms=1200)


def test_knowledge_base_has_sixteen_protocols_plus_default() -> None:
    base = BaseConocimiento()

    assert len(base) == 16
    assert len(PROTOCOLOS) == 16
    assert base.default is PROTOCOLO_DEFAULT
    assert base.get("DEFAULT") is PROTOCOLO_DEFAULT
    assert base.get("PROTO-CVS-001").condicion == "Essential Hypertension (Stage 1)"


@pytest.mark.parametrize(
    ("diagnostico", "codigo"),
    [
        ("Essential Hypertension", "PROTO-CVS-001"),
        ("HYPERTENSION", "PROTO-CVS-001"),
        # Primera coincidencia en orden de declaración: "bp" pertenece a CVS-001.
        ("Uncontrolled BP", "PROTO-CVS-001"),
        ("patient has htn and chest pain", "PROTO-CVS-001"),
        ("Chest pain on exertion", "PROTO-CVS-003"),
        ("Migraine", "PROTO-GEN-003"),
        ("zzz", "DEFAULT"),
        ("", "DEFAULT"),
    ],
)
def test_match_uses_first_keyword_hit_in_declaration_order(motor: MotorProtocolos, diagnostico: str, codigo: str) -> None:
    assert motor.match(diagnostico).codigo == codigo


def test_suggestion_fills_empty_advice_and_appends_rx(container) -> None:
    paciente = container.registro.register(nombre="Asha", alergias="Telmisartan")
    sesion = container.sesion
    sesion.load_patient_context(paciente)
    container.editor.add(BorradorLinea(farmaco="Tab. Aspirin 75mg"))
    sesion.notas.diagnostico = "Essential Hypertension"
    resultados = []

    solicitud = container.motor.request_suggestion(sesion, resultados.append)

    assert solicitud.estado == EstadoSolicitud.COMPLETADA
    assert resultados == [solicitud.resultado]
    assert solicitud.resultado.coincidencia
    assert sesion.notas.consejos == CONSEJOS_HTN
    assert sesion.notas.pruebas == PRUEBAS_HTN
    # Se añaden al final, sin pasar por el control de alergias.
    assert [linea.farmaco for linea in container.editor.items] == [
        "Tab. Aspirin 75mg",
        "Tab. Telmisartan 40mg",
        "Tab. Amlodipine 5mg",
    ]
    assert all(linea.id.startswith("AI-RX-") for linea in solicitud.resultado.lineas_anadidas)


def test_suggestion_appends_advice_without_duplicating(container) -> None:
    sesion = container.sesion
    sesion.load_patient_context(container.registro.register(nombre="Ravi"))
    sesion.notas.diagnostico = "htn"
    sesion.notas.consejos = "Walk daily."

    container.motor.request_suggestion(sesion)
    container.motor.request_suggestion(sesion)

    assert sesion.notas.consejos == f"Walk daily.\n{CONSEJOS_HTN}"
    assert sesion.notas.pruebas == PRUEBAS_HTN
    assert len(container.editor) == 4


def test_suggestion_without_match_applies_default(container) -> None:
    sesion = container.sesion
    sesion.load_patient_context(container.registro.register(nombre="Ravi"))
    sesion.notas.diagnostico = "zzz"

    solicitud = container.motor.request_suggestion(sesion)

    assert solicitud.resultado.protocolo.codigo == "DEFAULT"
    assert not solicitud.resultado.coincidencia
    assert sesion.notas.consejos == "Follow general hygiene. Review if symptoms persist."
    assert [linea.farmaco for linea in container.editor.items] == ["Tab. Multivitamin", "Tab. Paracetamol 500mg"]


def test_suggestion_requires_diagnosis(container) -> None:
    sesion = container.sesion
    sesion.load_patient_context(container.registro.register(nombre="Ravi"))
    sesion.notas.diagnostico = "   "

    with pytest.raises(ValidationError):
        container.motor.request_suggestion(sesion)

    assert not container.motor.ocupado


def test_pending_suggestion_is_applied_only_when_timer_fires(container_manual, planificador_manual) -> None:
    sesion = container_manual.sesion
    sesion.load_patient_context(container_manual.registro.register(nombre="Ravi"))
    sesion.notas.diagnostico = "Hypertension"

    solicitud = container_manual.motor.request_suggestion(sesion)

    assert solicitud.pendiente
    assert container_manual.motor.ocupado
    assert sesion.notas.consejos == ""
    with pytest.raises(SuggestionInProgressError):
        container_manual.motor.request_suggestion(sesion)

    assert planificador_manual.run_pending() == 1
    assert solicitud.estado == EstadoSolicitud.COMPLETADA
    assert not container_manual.motor.ocupado
    assert sesion.notas.consejos == CONSEJOS_HTN


def test_cancelled_suggestion_leaves_visit_untouched(container_manual, planificador_manual) -> None:
    sesion = container_manual.sesion
    sesion.load_patient_context(container_manual.registro.register(nombre="Ravi"))
    sesion.notas.diagnostico = "Hypertension"
    solicitud = container_manual.motor.request_suggestion(sesion)

    assert solicitud.cancel()
    assert not solicitud.cancel()

    assert planificador_manual.pendientes == 0
    assert planificador_manual.run_pending() == 0
    assert solicitud.estado == EstadoSolicitud.CANCELADA
    assert sesion.notas.consejos == ""
    assert len(container_manual.editor) == 0
    assert not container_manual.motor.ocupado


def test_suggestion_is_discarded_when_visit_changes(container_manual, planificador_manual) -> None:
    sesion = container_manual.sesion
    registro = container_manual.registro
    sesion.load_patient_context(registro.register(nombre="Ravi"))
    sesion.notas.diagnostico = "Hypertension"
    solicitud = container_manual.motor.request_suggestion(sesion)

    sesion.load_patient_context(registro.register(nombre="Meera"))
    planificador_manual.run_pending()

    assert solicitud.estado == EstadoSolicitud.DESCARTADA
    assert solicitud.resultado is None
    assert sesion.notas.consejos == ""
    assert len(container_manual.editor) == 0
    assert not container_manual.motor.ocupado


class _SelectorFijo:
    def __init__(self, protocolo) -> None:
        self.protocolo = protocolo
        self.consultas = []

    def match(self, diagnostico: str):
        self.consultas.append(diagnostico)
        return self.protocolo


def test_selector_can_be_replaced_without_touching_session(container) -> None:
    migraine = BaseConocimiento().get("PROTO-GEN-003")
    selector = _SelectorFijo(migraine)
    motor = MotorProtocolos(PlanificadorInmediato(), selector=selector, delay_ms=0)
    sesion = container.sesion
    sesion.load_patient_context(container.registro.register(nombre="Ravi"))
    sesion.notas.diagnostico = "Essential Hypertension"

    solicitud = motor.request_suggestion(sesion)

    assert selector.consultas == ["Essential Hypertension"]
    assert solicitud.resultado.protocolo is migraine
    assert [linea.farmaco for linea in container.editor.items][0] == "Tab. Naproxen 250mg"


def test_apply_appends_differently_worded_advice_once(motor: MotorProtocolos, generador_ids) -> None:
    base = BaseConocimiento()
    htn = base.get("PROTO-CVS-001")
    angina = base.get("PROTO-CVS-003")
    notas = NotasClinicas()
    editor = EditorReceta(generar_id=generador_ids)

    motor.apply(htn, notas, editor)
    motor.apply(angina, notas, editor)

    assert notas.consejos == f"{htn.consejos}\n{angina.consejos}"
    assert notas.pruebas == f"{htn.pruebas}\n{angina.pruebas}"
    assert len(editor) == len(htn.rx) + len(angina.rx)

    motor.apply(htn, notas, editor)

    assert notas.consejos == f"{htn.consejos}\n{angina.consejos}"
    assert notas.pruebas == f"{htn.pruebas}\n{angina.pruebas}"
    # Las líneas del protocolo se añaden siempre, aunque se repitan.
    assert len(editor) == 2 * len(htn.rx) + len(angina.rx)


def test_suggestion_without_active_visit_is_rejected(container) -> None:
    container.sesion.notas.diagnostico = "Hypertension"

    with pytest.raises(NoActivePatientError):
        container.motor.request_suggestion(container.sesion)

    assert not container.motor.ocupado
    assert len(container.editor) == 0
