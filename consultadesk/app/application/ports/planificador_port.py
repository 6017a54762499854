from __future__ import annotations

from typing import Callable, Protocol


class TareaProgramada(Protocol):
    def cancel(self) -> None:
        """Evita que el callback se ejecute si aún no lo ha hecho."""


class PlanificadorPort(Protocol):
    """Temporizador de un solo disparo en el hilo de la UI (QTimer en escritorio, inmediato en tests)."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TareaProgramada:
        ...
