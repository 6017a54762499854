"""Entidades de personas del dominio."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

from consultadesk.app.domain.value_objects import _require_non_empty, _strip_or_empty, _text_from

EDAD_DESCONOCIDA = "--"


@dataclass(slots=True)
class Paciente:
    """
    Paciente registrado en la consulta.

    - id: UHID generado en el registro, inmutable.
    - alergias / cronicos: texto libre; se sobrescriben al guardar una visita.
    - Nunca se borra.
    """

    id: str = ""
    nombre: str = ""
    telefono: str = ""
    edad: str = EDAD_DESCONOCIDA
    sexo: str = ""
    alergias: str = ""
    cronicos: str = ""
    registrado_en: str = ""

    def validar(self) -> None:
        self.nombre = _require_non_empty(self.nombre, "nombre")
        self.telefono = _strip_or_empty(self.telefono)
        self.edad = _strip_or_empty(self.edad) or EDAD_DESCONOCIDA
        self.sexo = _strip_or_empty(self.sexo)
        self.alergias = _strip_or_empty(self.alergias)
        self.cronicos = _strip_or_empty(self.cronicos)

    @property
    def tiene_alergias(self) -> bool:
        return bool(self.alergias.strip())

    def edad_sexo(self) -> str:
        """Formato de cabecera: ``45 / M``."""
        return f"{self.edad} / {self.sexo}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Paciente":
        return cls(
            id=_text_from(data, "id"),
            nombre=_text_from(data, "nombre"),
            telefono=_text_from(data, "telefono"),
            edad=_text_from(data, "edad", EDAD_DESCONOCIDA),
            sexo=_text_from(data, "sexo"),
            alergias=_text_from(data, "alergias"),
            cronicos=_text_from(data, "cronicos"),
            registrado_en=_text_from(data, "registrado_en"),
        )
