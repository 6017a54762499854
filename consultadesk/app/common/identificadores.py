"""Generación de identificadores legibles (UHID de paciente, visitas y líneas Rx)."""

from __future__ import annotations

import secrets
import time
from typing import Callable, Container

_ALFABETO_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_LONGITUD_ALEATORIA = 5

GeneradorId = Callable[[str], str]


def _base36(numero: int) -> str:
    if numero == 0:
        return "0"
    digitos: list[str] = []
    while numero:
        numero, resto = divmod(numero, 36)
        digitos.append(_ALFABETO_BASE36[resto])
    return "".join(reversed(digitos))


def generate_id(prefix: str = "ID") -> str:
    """Formato PREFIJO-TIEMPO36-ALEATORIO, en mayúsculas (p. ej. ``P-LZ3K9Q1A-4F7XQ``)."""
    marca = _base36(time.time_ns() // 1_000_000)
    sufijo = "".join(secrets.choice(_ALFABETO_BASE36) for _ in range(_LONGITUD_ALEATORIA))
    return f"{prefix}-{marca}-{sufijo}".upper()


def generate_unique_id(prefix: str, existentes: Container[str], generador: GeneradorId = generate_id) -> str:
    """Repite la generación hasta obtener un id que no esté en ``existentes``."""
    candidato = generador(prefix)
    while candidato in existentes:
        candidato = generador(prefix)
    return candidato
