# domain/enums.py
from __future__ import annotations
from enum import Enum


class EstadoVisita(str, Enum):
    DRAFT = "draft"
    SAVED = "saved"


class EstadoSesion(str, Enum):
    UNLOADED = "UNLOADED"
    DRAFT = "DRAFT"
    SAVED = "SAVED"
    # Visita histórica cargada sobre el formulario actual.
    HISTORY = "HISTORY"


class CategoriaIMC(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class CampoNota(str, Enum):
    MOTIVO = "motivo"
    EXPLORACION = "exploracion"
    DIAGNOSTICO = "diagnostico"
    CONSEJOS = "consejos"
    PRUEBAS = "pruebas"
