# application/documentos/documento_visita.py
"""
Documento imprimible de la visita (receta A4).

Genera HTML autocontenido y compatible con el subconjunto que renderiza
QTextDocument (tablas en lugar de flex/grid). Todo texto de usuario pasa por
``escape_html``.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import List, Optional

from consultadesk.app.application.services.ajustes_service import ServicioAjustes
from consultadesk.app.application.services.almacen_clinico import ResultadoGuardado
from consultadesk.app.application.visitas.sesion import SesionVisita
from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.domain.ajustes import AjustesClinica
from consultadesk.app.domain.exceptions import NoActivePatientError
from consultadesk.app.domain.farmacia import LineaReceta
from consultadesk.app.domain.personas import Paciente
from consultadesk.app.domain.visitas import ConstantesVitales, NotasClinicas

LOGGER = get_logger(__name__)

_CELDA = "padding:5px; border:1px solid #000;"
_CABECERA = "padding:6px; border:1px solid #000; background:#f1f5f9;"


@dataclass(frozen=True, slots=True)
class DocumentoClinico:
    html: str
    visita_id: str
    titulo: str
    guardado: Optional[ResultadoGuardado] = None


def escape_html(texto: Optional[str]) -> str:
    """Escapa ``& < > " '`` y convierte saltos de línea en ``<br>``."""
    if not texto:
        return ""
    return html.escape(str(texto), quote=True).replace("&#x27;", "&#039;").replace("\n", "<br>")


class GeneradorDocumento:
    def __init__(self, sesion: SesionVisita, ajustes: ServicioAjustes) -> None:
        self._sesion = sesion
        self._ajustes = ajustes

    def generate(self) -> DocumentoClinico:
        """Guarda la visita (propaga NoActivePatientError) y devuelve el HTML a imprimir."""
        guardado = self._sesion.save()
        paciente = self._sesion.paciente
        visita = self._sesion.visita
        if paciente is None or visita is None:
            raise NoActivePatientError("No hay paciente activo.")

        contenido = render_html(
            self._ajustes.current(),
            paciente,
            fecha=visita.fecha[:10],
            notas=visita.notas,
            constantes=visita.constantes,
            rx=visita.rx,
        )
        LOGGER.info("document_generated visit_id=%s rx_count=%s", visita.id, len(visita.rx))
        return DocumentoClinico(
            html=contenido,
            visita_id=visita.id,
            titulo=f"Rx {paciente.id} {visita.fecha[:10]}",
            guardado=guardado,
        )


def render_html(
    ajustes: AjustesClinica,
    paciente: Paciente,
    *,
    fecha: str,
    notas: NotasClinicas,
    constantes: ConstantesVitales,
    rx: List[LineaReceta],
) -> str:
    partes = [
        "<html><body style=\"font-family:'Segoe UI', sans-serif; color:#000;\">",
        _cabecera(ajustes),
        _bloque_paciente(paciente, fecha),
        _bloque_clinico(notas, constantes),
        _tabla_rx(rx),
        _bloque_consejos(notas),
        _pie(ajustes),
        "</body></html>",
    ]
    return "\n".join(p for p in partes if p)


def _cabecera(ajustes: AjustesClinica) -> str:
    return (
        '<table width="100%" style="border-bottom:3px solid #1e3a8a; margin-bottom:20px;"><tr>'
        f'<td><h1 style="margin:0; color:#1e3a8a;">{escape_html(ajustes.nombre_clinica.upper())}</h1>'
        f'<div style="font-size:12px; color:#555;">{escape_html(ajustes.direccion)}</div></td>'
        f'<td align="right"><h2 style="margin:0;">{escape_html(ajustes.nombre_medico)}</h2></td>'
        "</tr></table>"
    )


def _bloque_paciente(paciente: Paciente, fecha: str) -> str:
    return (
        '<table width="100%" cellpadding="6" style="font-size:13px; background:#f8fafc; border:1px solid #ddd;">'
        f"<tr><td><b>Name:</b> {escape_html(paciente.nombre)}</td>"
        f"<td><b>Age/Sex:</b> {escape_html(paciente.edad_sexo())}</td>"
        f"<td><b>Visit ID:</b> {escape_html(paciente.id)}</td></tr>"
        f"<tr><td><b>Date:</b> {escape_html(fecha)}</td>"
        f"<td colspan=\"2\"><b>Phone:</b> {escape_html(paciente.telefono)}</td></tr>"
        "</table>"
    )


def _linea_constantes(constantes: ConstantesVitales) -> str:
    if not constantes.tension:
        return ""
    valores = (
        f"BP: {escape_html(constantes.tension)} | Pulse: {escape_html(constantes.pulso)} | "
        f"Temp: {escape_html(constantes.temperatura)} | SpO2: {escape_html(constantes.spo2)}% | "
        f"Wt: {escape_html(constantes.peso)}"
    )
    return (
        '<p style="font-family:monospace; border:1px solid #000; padding:8px;">'
        f"<b>VITALS:</b> {valores}</p>"
    )


def _seccion(titulo: str, texto: str, *, negrita: bool = False) -> str:
    if not texto:
        return ""
    cuerpo = f"<b>{escape_html(texto)}</b>" if negrita else escape_html(texto)
    return f"<p><b>{titulo}:</b><br>{cuerpo}</p>"


def _bloque_clinico(notas: NotasClinicas, constantes: ConstantesVitales) -> str:
    return "".join(
        (
            _linea_constantes(constantes),
            _seccion("Chief Complaints", notas.motivo),
            _seccion("Examination", notas.exploracion),
            _seccion("Diagnosis", notas.diagnostico, negrita=True),
        )
    )


def _tabla_rx(rx: List[LineaReceta]) -> str:
    if not rx:
        return ""
    cabeceras = ("#", "Medicine Name", "Dose", "Frequency", "Duration", "Instruction")
    filas = [
        "<tr>" + "".join(f'<th style="{_CABECERA}">{c}</th>' for c in cabeceras) + "</tr>"
    ]
    for numero, linea in enumerate(rx, start=1):
        filas.append(
            "<tr>"
            f'<td style="{_CELDA}" align="center">{numero}</td>'
            f'<td style="{_CELDA}"><b>{escape_html(linea.farmaco)}</b></td>'
            f'<td style="{_CELDA}">{escape_html(linea.dosis)}</td>'
            f'<td style="{_CELDA}">{escape_html(linea.frecuencia)}</td>'
            f'<td style="{_CELDA}">{escape_html(linea.duracion)}</td>'
            f'<td style="{_CELDA}"><i>{escape_html(linea.observaciones)}</i></td>'
            "</tr>"
        )
    return (
        '<div style="margin-top:25px;">'
        '<div style="font-size:32px; font-weight:bold; font-family:serif;">&#8478;</div>'
        '<table width="100%" cellspacing="0" style="border-collapse:collapse; font-size:13px;">'
        + "".join(filas)
        + "</table></div>"
    )


def _bloque_consejos(notas: NotasClinicas) -> str:
    contenido = _seccion("Advice / Follow-up", notas.consejos) + _seccion(
        "Investigations Required", notas.pruebas
    )
    return f'<div style="margin-top:25px; border:1px dashed #999; padding:15px;">{contenido}</div>'


def _pie(ajustes: AjustesClinica) -> str:
    return (
        '<table width="100%" style="margin-top:60px;"><tr>'
        f'<td style="font-size:11px; color:#666;"><i>{escape_html(ajustes.pie_pagina)}</i></td>'
        '<td align="center" width="200">'
        '<div style="height:50px;"></div>'
        f'<div style="border-top:1px solid #000; font-weight:bold;">{escape_html(ajustes.nombre_medico)}</div>'
        '<div style="font-size:10px;">(Signature)</div>'
        "</td></tr></table>"
    )
