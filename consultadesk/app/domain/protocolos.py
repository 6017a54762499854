"""Protocolos clínicos de la base de conocimiento (inmutables)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Tuple

from consultadesk.app.domain.farmacia import LineaReceta

CODIGO_DEFAULT = "DEFAULT"


@dataclass(frozen=True, slots=True)
class LineaProtocolo:
    farmaco: str
    dosis: str
    frecuencia: str
    duracion: str
    observaciones: str = ""

    def to_linea_receta(self, linea_id: str) -> LineaReceta:
        return LineaReceta(
            id=linea_id,
            farmaco=self.farmaco,
            dosis=self.dosis,
            frecuencia=self.frecuencia,
            duracion=self.duracion,
            observaciones=self.observaciones,
        )


@dataclass(frozen=True, slots=True)
class Protocolo:
    codigo: str
    condicion: str
    categoria: str
    keywords: FrozenSet[str]
    rx: Tuple[LineaProtocolo, ...]
    consejos: str
    pruebas: str

    @classmethod
    def crear(
        cls,
        codigo: str,
        *,
        condicion: str,
        categoria: str,
        keywords: Iterable[str],
        rx: Iterable[LineaProtocolo],
        consejos: str,
        pruebas: str,
    ) -> "Protocolo":
        return cls(
            codigo=codigo,
            condicion=condicion,
            categoria=categoria,
            keywords=frozenset(k.strip().lower() for k in keywords if k.strip()),
            rx=tuple(rx),
            consejos=consejos,
            pruebas=pruebas,
        )

    @property
    def es_fallback(self) -> bool:
        return self.codigo == CODIGO_DEFAULT

    def coincide(self, texto_normalizado: str) -> bool:
        """True si alguna keyword aparece como subcadena del texto (ya en minúsculas)."""
        return any(keyword in texto_normalizado for keyword in self.keywords)
