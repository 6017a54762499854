"""Enmascarado de datos personales y clínicos antes de que lleguen a los logs."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

MASCARA = "***"

# Fragmentos de clave que identifican al paciente o describen su cuadro clínico.
CLAVES_SENSIBLES = frozenset(
    {
        "nombre",
        "name",
        "telefono",
        "teléfono",
        "phone",
        "email",
        "correo",
        "alergias",
        "allergies",
        "cronicos",
        "diagnostico",
        "diagnosis",
        "dictado",
    }
)

_ALTERNATIVAS = "|".join(sorted(map(re.escape, CLAVES_SENSIBLES), key=len, reverse=True))

_REGLAS_TEXTO: tuple[tuple[re.Pattern[str], str], ...] = (
    # clave=valor en los mensajes de evento ("patient_name=Asha").
    (re.compile(rf"(?P<clave>\w*(?:{_ALTERNATIVAS})\w*)=(?P<valor>[^\s,;]+)", re.IGNORECASE), rf"\g<clave>={MASCARA}"),
    (re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"), MASCARA),
    # Móviles de 10 dígitos o con prefijo internacional y separadores.
    (re.compile(r"(?<![\w-])\+?\d[\d\s().]{8,}\d(?![\w-])"), MASCARA),
)


def redact_text(value: str) -> str:
    for patron, reemplazo in _REGLAS_TEXTO:
        value = patron.sub(reemplazo, value)
    return value


def redact_value(value: Any, *, key: str | None = None) -> Any:
    """Recorre dicts y listas; las cadenas bajo una clave sensible se sustituyen enteras."""
    if isinstance(value, str):
        return MASCARA if es_clave_sensible(key) else redact_text(value)
    if isinstance(value, Mapping):
        return {k: redact_value(v, key=str(k)) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [redact_value(item, key=key) for item in value]
    return value


def es_clave_sensible(key: str | None) -> bool:
    if not key:
        return False
    clave = key.lower()
    return any(parte in clave for parte in CLAVES_SENSIBLES)
