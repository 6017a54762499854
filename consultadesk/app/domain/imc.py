"""Cálculo del índice de masa corporal (IMC/BMI)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from consultadesk.app.domain.enums import CategoriaIMC

Medida = Union[str, int, float, None]

# Límites semiabiertos: Overweight = [25, 30), el valor 29.9 queda en Overweight.
_LIMITE_BAJO_PESO = 18.5
_LIMITE_SOBREPESO = 25.0
_LIMITE_OBESIDAD = 30.0


@dataclass(frozen=True, slots=True)
class ResultadoIMC:
    valor: str
    categoria: CategoriaIMC

    def texto(self) -> str:
        return f"BMI: {self.valor} ({self.categoria.value})"


def _to_float(value: Medida) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def clasificar_imc(imc: float) -> CategoriaIMC:
    if imc < _LIMITE_BAJO_PESO:
        return CategoriaIMC.UNDERWEIGHT
    if imc < _LIMITE_SOBREPESO:
        return CategoriaIMC.NORMAL
    if imc < _LIMITE_OBESIDAD:
        return CategoriaIMC.OVERWEIGHT
    return CategoriaIMC.OBESE


def calcular_imc(peso_kg: Medida, talla_cm: Medida) -> Optional[ResultadoIMC]:
    """
    IMC = peso / (talla en metros)².

    Devuelve None si falta alguna medida, no es numérica o no es positiva.
    El valor se redondea a un decimal y la categoría se calcula sobre ese mismo valor,
    de modo que el texto mostrado y la banda nunca se contradicen.
    """
    peso = _to_float(peso_kg)
    talla = _to_float(talla_cm)
    if peso is None or talla is None:
        return None
    talla_m = talla / 100
    imc = round(peso / (talla_m * talla_m), 1)
    return ResultadoIMC(valor=f"{imc:.1f}", categoria=clasificar_imc(imc))
