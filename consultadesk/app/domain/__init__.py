from consultadesk.app.domain.ajustes import AjustesClinica
from consultadesk.app.domain.alergias import ComprobadorAlergias
from consultadesk.app.domain.farmacia import LineaReceta
from consultadesk.app.domain.imc import ResultadoIMC, calcular_imc
from consultadesk.app.domain.personas import Paciente
from consultadesk.app.domain.protocolos import LineaProtocolo, Protocolo
from consultadesk.app.domain.visitas import ConstantesVitales, NotasClinicas, Visita
from consultadesk.app.domain.enums import *  # noqa: F401,F403
from consultadesk.app.domain.exceptions import *  # noqa: F401,F403

__all__ = [
    "AjustesClinica",
    "ComprobadorAlergias",
    "ConstantesVitales",
    "LineaProtocolo",
    "LineaReceta",
    "NotasClinicas",
    "Paciente",
    "Protocolo",
    "ResultadoIMC",
    "Visita",
    "calcular_imc",
]
