# apen_contact/validation.py  # Validación de la solicitud de contacto.

# =================================================================================
# ✅ Validador del formulario
# ---------------------------------------------------------------------------------
# Reglas (en orden):
#   1. name/email/phone/service/date/time vacíos → "campos requeridos".
#   2. email que no cumple local@dominio.tld → "email inválido".
# Sin red ni efectos secundarios: misma entrada, mismo veredicto.
# =================================================================================

import re

from apen_contact.errors import InputError
from apen_contact.schemas import ContactRequest
from apen_contact.utils.i18n import messages_for

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")                        # Patrón sintáctico simple (sin DNS).


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.fullmatch(value or ""))                           # fullmatch: sin '\n' colado al final.


def validate_submission(record: ContactRequest) -> None:
    """Lanza InputError con el mensaje ya traducido si la solicitud no es válida."""
    texts = messages_for(record.language)

    if record.missing_fields():                                            # Regla 1: obligatorios.
        raise InputError(texts.missing_fields, reason="missing_fields")

    if not is_valid_email(record.email):                                   # Regla 2: formato de email.
        raise InputError(texts.invalid_email, reason="invalid_email")
