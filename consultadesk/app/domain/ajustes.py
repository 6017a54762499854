from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

from consultadesk.app.domain.value_objects import _text_from

NOMBRE_CLINICA_DEFECTO = "Solo Clinic"
NOMBRE_MEDICO_DEFECTO = "Dr. Yusuf Abbas"
DIRECCION_DEFECTO = "Department of Cardiology\nCity Heart Institute, Medical District"
PIE_PAGINA_DEFECTO = "Emergency Contact: 108 | Get well soon."


@dataclass(frozen=True, slots=True)
class AjustesClinica:
    """Membrete de la consulta: único registro de configuración del dominio."""

    nombre_clinica: str = NOMBRE_CLINICA_DEFECTO
    nombre_medico: str = NOMBRE_MEDICO_DEFECTO
    direccion: str = DIRECCION_DEFECTO
    pie_pagina: str = PIE_PAGINA_DEFECTO

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AjustesClinica":
        defaults = cls()
        return cls(
            nombre_clinica=_text_from(data, "nombre_clinica", defaults.nombre_clinica),
            nombre_medico=_text_from(data, "nombre_medico", defaults.nombre_medico),
            direccion=_text_from(data, "direccion", defaults.direccion),
            pie_pagina=_text_from(data, "pie_pagina", defaults.pie_pagina),
        )
