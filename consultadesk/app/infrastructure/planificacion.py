from __future__ import annotations

from typing import Callable, List, Tuple

from consultadesk.app.application.ports.planificador_port import PlanificadorPort, TareaProgramada


class _TareaResuelta:
    def cancel(self) -> None:
        return None


class PlanificadorInmediato(PlanificadorPort):
    """Ejecuta el callback en el acto, ignorando el retardo (tests y modo sin UI)."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TareaProgramada:
        callback()
        return _TareaResuelta()


class _TareaManual:
    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.cancelada = False

    def cancel(self) -> None:
        self.cancelada = True


class PlanificadorManual(PlanificadorPort):
    """Acumula tareas hasta que se llame a ``run_pending`` (control explícito del tiempo)."""

    def __init__(self) -> None:
        self._tareas: List[Tuple[int, _TareaManual]] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TareaProgramada:
        tarea = _TareaManual(callback)
        self._tareas.append((delay_ms, tarea))
        return tarea

    @property
    def pendientes(self) -> int:
        return sum(1 for _, tarea in self._tareas if not tarea.cancelada)

    def run_pending(self) -> int:
        tareas, self._tareas = self._tareas, []
        ejecutadas = 0
        for _, tarea in tareas:
            if tarea.cancelada:
                continue
            tarea.callback()
            ejecutadas += 1
        return ejecutadas
