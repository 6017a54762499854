"""
Comprobación de seguridad frente a alergias registradas.

Heurística deliberadamente simple (subcadena), no es un chequeo clínico de
interacciones: no garantiza ausencia de falsos negativos.
"""

from __future__ import annotations

from consultadesk.app.domain.farmacia import primary_drug_token


class ComprobadorAlergias:
    def check(self, farmaco: str, alergias_paciente: str) -> bool:
        """
        True si las alergias (no vacías) contienen el primer token del fármaco.

        El token se toma tras la forma farmacéutica: en ``"Tab. Aspirin 75mg"`` es ``aspirin``.
        """
        alergias = (alergias_paciente or "").strip().lower()
        if not alergias:
            return False
        token = primary_drug_token(farmaco or "")
        if not token:
            return False
        return token in alergias
