"""Notificaciones toast de la ventana principal."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

TIPOS_TOAST = ("info", "success", "warning", "error")

Suscriptor = Callable[[dict[str, Any]], None]


class GestorToasts:
    """Gestor de notificaciones toast independiente de Qt para facilitar tests."""

    def __init__(self) -> None:
        self._notificaciones: list[dict[str, Any]] = []
        self._suscriptores: list[Suscriptor] = []

    @property
    def notificaciones(self) -> list[dict[str, Any]]:
        """Expone notificaciones emitidas para inspección en tests."""
        return self._notificaciones

    def subscribe(self, suscriptor: Suscriptor) -> None:
        """La ventana se suscribe para pintar cada toast (barra de estado)."""
        self._suscriptores.append(suscriptor)

    def _emitir(self, tipo: str, message: str, *, title: str | None = None) -> dict[str, Any]:
        payload = {"tipo": tipo, "message": message, "title": title}
        self._notificaciones.append(payload)
        for suscriptor in self._suscriptores:
            suscriptor(payload)
        return payload

    def info(self, message: str, *, title: str | None = None) -> dict[str, Any]:
        return self._emitir("info", message, title=title)

    def success(self, message: str, *, title: str | None = None) -> dict[str, Any]:
        return self._emitir("success", message, title=title)

    def warning(self, message: str, *, title: str | None = None) -> dict[str, Any]:
        return self._emitir("warning", message, title=title)

    def error(self, message: str, *, title: str | None = None) -> dict[str, Any]:
        return self._emitir("error", message, title=title)


__all__ = ["GestorToasts", "TIPOS_TOAST"]
