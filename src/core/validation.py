"""
Input Validation Helpers
========================

Presence checks shared by the application services. They run before any
I/O so a rejected request never touches the store or the classifier.
"""

from src.core.exceptions import ValidationException

MISSING_FIELDS_MESSAGE = "Faltan campos obligatorios"


def is_missing(value: object) -> bool:
    """A required field is missing when absent, blank, or zero."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return not value


def require_fields(*values: object, message: str = MISSING_FIELDS_MESSAGE) -> None:
    """Raise ValidationException unless every value is present."""
    if any(is_missing(v) for v in values):
        raise ValidationException(message)
