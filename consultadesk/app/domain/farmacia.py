"""Líneas de prescripción (Rx) y convenciones de forma farmacéutica."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from consultadesk.app.domain.value_objects import _require_non_empty, _strip_or_empty, _text_from

# Prefijos de forma farmacéutica reconocidos al inicio del nombre del fármaco.
FORMAS_FARMACEUTICAS: Tuple[str, ...] = ("Tab.", "Cap.", "Syr.", "Inj.", "Oint.", "Drops")


@dataclass(slots=True)
class LineaReceta:
    """Línea de la receta: fármaco, dosis, frecuencia (OD/BD/TDS/HS/SOS), duración y observaciones."""

    id: str = ""
    farmaco: str = ""
    dosis: str = ""
    frecuencia: str = ""
    duracion: str = ""
    observaciones: str = ""

    def validar(self) -> None:
        self.farmaco = _require_non_empty(self.farmaco, "farmaco")
        self.dosis = _strip_or_empty(self.dosis)
        self.frecuencia = _strip_or_empty(self.frecuencia)
        self.duracion = _strip_or_empty(self.duracion)
        self.observaciones = _strip_or_empty(self.observaciones)

    def copia(self) -> "LineaReceta":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineaReceta":
        return cls(
            id=_text_from(data, "id"),
            farmaco=_text_from(data, "farmaco"),
            dosis=_text_from(data, "dosis"),
            frecuencia=_text_from(data, "frecuencia"),
            duracion=_text_from(data, "duracion"),
            observaciones=_text_from(data, "observaciones"),
        )


def split_dosage_form(farmaco: str) -> Tuple[Optional[str], str]:
    """Separa el prefijo de forma (``Tab.``) del nombre a mostrar; ``(None, farmaco)`` si no hay prefijo."""
    texto = farmaco.strip()
    for forma in FORMAS_FARMACEUTICAS:
        if texto.startswith(forma):
            return forma, texto[len(forma):].strip()
    return None, texto


def set_dosage_form(farmaco: str, forma: str) -> str:
    """Sustituye la forma existente o la antepone si el nombre no la tenía."""
    actual = farmaco.strip()
    if any(actual.startswith(f) for f in FORMAS_FARMACEUTICAS):
        partes = actual.split(" ")
        partes[0] = forma
        return " ".join(partes)
    return f"{forma} {actual}".strip()


def primary_drug_token(farmaco: str) -> str:
    """Primer token del nombre tras descartar la forma farmacéutica, en minúsculas."""
    _, nombre = split_dosage_form(farmaco)
    tokens = nombre.split() or farmaco.split()
    return tokens[0].lower() if tokens else ""
