"""Visita clínica: notas, constantes vitales y la instantánea de la receta."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping

from consultadesk.app.domain.enums import EstadoVisita
from consultadesk.app.domain.farmacia import LineaReceta
from consultadesk.app.domain.value_objects import _text_from


@dataclass(slots=True)
class NotasClinicas:
    motivo: str = ""
    exploracion: str = ""
    diagnostico: str = ""
    consejos: str = ""
    pruebas: str = ""

    def copia(self) -> "NotasClinicas":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NotasClinicas":
        return cls(**{f.name: _text_from(data, f.name) for f in fields(cls)})


@dataclass(slots=True)
class ConstantesVitales:
    """Constantes tal como se teclean (texto libre o cadenas numéricas)."""

    tension: str = ""
    pulso: str = ""
    temperatura: str = ""
    spo2: str = ""
    peso: str = ""
    talla: str = ""

    def copia(self) -> "ConstantesVitales":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConstantesVitales":
        return cls(**{f.name: _text_from(data, f.name) for f in fields(cls)})


@dataclass(slots=True)
class Visita:
    """
    Encuentro clínico de un paciente.

    - paciente_id es una referencia débil (solo búsqueda, sin borrado en cascada).
    - Se guarda con upsert por id: como mucho un registro almacenado por id.
    """

    id: str = ""
    paciente_id: str = ""
    fecha: str = ""
    estado: EstadoVisita = EstadoVisita.DRAFT
    notas: NotasClinicas = field(default_factory=NotasClinicas)
    constantes: ConstantesVitales = field(default_factory=ConstantesVitales)
    rx: List[LineaReceta] = field(default_factory=list)

    @property
    def guardada(self) -> bool:
        return self.estado == EstadoVisita.SAVED

    def copia(self) -> "Visita":
        return replace(
            self,
            notas=self.notas.copia(),
            constantes=self.constantes.copia(),
            rx=[linea.copia() for linea in self.rx],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "paciente_id": self.paciente_id,
            "fecha": self.fecha,
            "estado": self.estado.value,
            "notas": self.notas.to_dict(),
            "constantes": self.constantes.to_dict(),
            "rx": [linea.to_dict() for linea in self.rx],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Visita":
        estado_raw = _text_from(data, "estado", EstadoVisita.SAVED.value)
        try:
            estado = EstadoVisita(estado_raw)
        except ValueError:
            estado = EstadoVisita.SAVED
        return cls(
            id=_text_from(data, "id"),
            paciente_id=_text_from(data, "paciente_id"),
            fecha=_text_from(data, "fecha"),
            estado=estado,
            notas=NotasClinicas.from_dict(data.get("notas") or {}),
            constantes=ConstantesVitales.from_dict(data.get("constantes") or {}),
            rx=[LineaReceta.from_dict(item) for item in data.get("rx") or []],
        )
