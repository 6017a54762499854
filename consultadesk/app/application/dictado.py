"""
Destino del dictado por voz.

El reconocimiento de voz es externo: aquí solo se decide a qué campo de notas
va cada resultado final. Hay como mucho un campo activo; cada ``start`` emite
un token nuevo y los resultados con un token antiguo se ignoran.
"""

from __future__ import annotations

from itertools import count
from typing import TYPE_CHECKING, Optional, Union

from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.domain.enums import CampoNota

if TYPE_CHECKING:
    from consultadesk.app.application.visitas.sesion import SesionVisita

LOGGER = get_logger(__name__)


class DictadoVoz:
    def __init__(self, sesion: "SesionVisita") -> None:
        self._sesion = sesion
        self._tokens = count(1)
        self._token_activo: Optional[int] = None
        self._campo: Optional[CampoNota] = None
        self._grabando = False

    @property
    def grabando(self) -> bool:
        return self._grabando

    @property
    def campo_activo(self) -> Optional[CampoNota]:
        return self._campo

    def start(self, campo: Union[str, CampoNota]) -> int:
        self._campo = CampoNota(campo)
        self._token_activo = next(self._tokens)
        self._grabando = True
        LOGGER.info("dictation_started field=%s", self._campo.value)
        return self._token_activo

    def stop(self) -> None:
        # El token sigue vigente: el reconocedor puede entregar el resultado final tras parar.
        self._grabando = False

    def deliver(self, token: int, texto: str) -> bool:
        if token != self._token_activo or self._campo is None:
            LOGGER.info("dictation_result_ignored reason=stale_token")
            return False
        texto = (texto or "").strip()
        if not texto:
            return False
        notas = self._sesion.notas
        actual = getattr(notas, self._campo.value)
        setattr(notas, self._campo.value, f"{actual} {texto}" if actual else texto)
        return True
