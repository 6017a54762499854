# domain/exceptions.py
"""
Excepciones del dominio.

Propósito:
- Distinguir errores de reglas clínicas (dominio) de errores técnicos (almacenamiento/UI).
- Permitir que la capa de aplicación/UI traduzca errores a mensajes para el usuario.
- Toda operación que lanza una de estas excepciones aborta sin modificar el estado.
"""


class DomainError(Exception):
    """Error base del dominio."""


class ValidationError(DomainError):
    """Campo obligatorio vacío o entidad en estado inválido."""


class NoActivePatientError(DomainError):
    """Operación que exige un paciente cargado (p. ej. guardar la visita) sin contexto activo."""


class AllergyConfirmationRequired(DomainError):
    """
    Punto de confirmación de seguridad: el fármaco coincide con las alergias registradas.

    No es un fallo: la línea solo se añade si el usuario confirma explícitamente
    (``confirmar_alergia=True``).
    """

    def __init__(self, farmaco: str, alergias: str) -> None:
        super().__init__(
            f"El paciente tiene alergias registradas ('{alergias}'). "
            f"Confirma si deseas prescribir {farmaco}."
        )
        self.farmaco = farmaco
        self.alergias = alergias


class SuggestionInProgressError(DomainError):
    """Ya hay una sugerencia de protocolo pendiente; no se admite otra hasta que termine."""
