"""Utilidades internas de dominio."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from consultadesk.app.domain.exceptions import ValidationError


def _strip_or_empty(value: Optional[str]) -> str:
    """Normaliza texto libre opcional: None pasa a cadena vacía, el resto se recorta."""
    if value is None:
        return ""
    return str(value).strip()


def _require_non_empty(value: Optional[str], field_name: str) -> str:
    """Exige string no vacío; lanza ValidationError si no cumple."""
    v = _strip_or_empty(value)
    if not v:
        raise ValidationError(f"Campo obligatorio: {field_name}.")
    return v


def _text_from(data: Mapping[str, Any], key: str, default: str = "") -> str:
    """Lee un campo de texto de un payload persistido tolerando claves ausentes o nulas."""
    value = data.get(key)
    if value is None:
        return default
    return str(value)
