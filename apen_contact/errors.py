# apen_contact/errors.py  # Taxonomía de errores del pipeline de contacto.

# =================================================================================
# 🚨 Errores del formulario de contacto
# ---------------------------------------------------------------------------------
# - InputError: datos del formulario incompletos o email mal formado (400).
# - ConfigError: faltan variables de entorno del mailer (500, detalle solo en logs).
# - TransportError: fallo SMTP al verificar o enviar (500, detalle solo en logs).
# =================================================================================

from __future__ import annotations

from typing import Iterable


class ContactError(Exception):
    """Base de los errores que el endpoint convierte en respuesta JSON."""
    status_code = 500


class InputError(ContactError):
    """El mensaje ya viene traducido y se puede mostrar al usuario tal cual."""
    status_code = 400

    def __init__(self, message: str, reason: str = "invalid"):
        super().__init__(message)
        self.message = message
        self.reason = reason                                          # 'missing_fields' | 'invalid_email'


class ConfigError(ContactError):
    status_code = 500

    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(f"Faltan variables de entorno: {', '.join(self.missing)}")


class TransportError(ContactError):
    """Fallo SMTP; `stage` indica si ocurrió en 'verify' o en 'send'."""
    status_code = 500

    def __init__(self, stage: str, detail: str, recipient: str | None = None):
        self.stage = stage
        self.detail = detail
        self.recipient = recipient
        super().__init__(f"SMTP {stage} falló: {detail}")
