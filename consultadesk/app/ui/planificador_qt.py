from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer

from consultadesk.app.application.ports.planificador_port import PlanificadorPort, TareaProgramada


class _TareaQt:
    def __init__(self, timer: QTimer, callback: Callable[[], None]) -> None:
        self._timer = timer
        self._callback = callback
        self._activa = True
        timer.timeout.connect(self._disparar)

    def _disparar(self) -> None:
        if not self._activa:
            return
        self._activa = False
        self._timer.deleteLater()
        self._callback()

    def cancel(self) -> None:
        if not self._activa:
            return
        self._activa = False
        self._timer.stop()
        self._timer.deleteLater()


class PlanificadorQt(PlanificadorPort):
    """Temporizador de un solo disparo en el bucle de eventos de Qt."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TareaProgramada:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        tarea = _TareaQt(timer, callback)
        timer.start(max(0, int(delay_ms)))
        return tarea
