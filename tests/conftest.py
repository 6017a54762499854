from __future__ import annotations

import difflib
import pprint
from datetime import datetime
from itertools import count
from typing import Any, Callable

import pytest

from consultadesk.app.container import AppContainer, build_container
from consultadesk.app.domain.personas import Paciente
from consultadesk.app.infrastructure.persistencia.memoria import GatewayMemoria
from consultadesk.app.infrastructure.planificacion import PlanificadorInmediato, PlanificadorManual

FECHA_FIJA = datetime(2026, 3, 14, 9, 30, 0)


@pytest.fixture()
def gateway() -> GatewayMemoria:
    return GatewayMemoria()


@pytest.fixture()
def planificador_manual() -> PlanificadorManual:
    return PlanificadorManual()


@pytest.fixture()
def container(gateway: GatewayMemoria) -> AppContainer:
    return build_container(gateway, PlanificadorInmediato(), delay_ms=0)


@pytest.fixture()
def generador_ids() -> Callable[[str], str]:
    """Ids deterministas ``PREFIJO-1``, ``PREFIJO-2``… compartidos entre prefijos."""
    secuencia = count(1)
    return lambda prefix: f"{prefix}-{next(secuencia)}"


@pytest.fixture()
def reloj() -> Callable[[], datetime]:
    return lambda: FECHA_FIJA


@pytest.fixture()
def paciente(container: AppContainer) -> Paciente:
    return container.registro.register(
        nombre="Asha Verma",
        telefono="9876543210",
        edad="52",
        sexo="F",
        alergias="Penicillin, Sulfa",
        cronicos="HTN",
    )


@pytest.fixture()
def assert_expected_actual():
    def _assert(expected: Any, actual: Any, *, message: str) -> None:
        expected_str = pprint.pformat(expected, width=120)
        actual_str = pprint.pformat(actual, width=120)
        diff = "\n".join(
            difflib.unified_diff(
                expected_str.splitlines(),
                actual_str.splitlines(),
                fromfile="expected",
                tofile="actual",
                lineterm="",
            )
        )
        assert expected == actual, (
            f"{message}\nExpected:\n{expected_str}\nActual:\n{actual_str}\nDiff:\n{diff}"
        )

    return _assert
