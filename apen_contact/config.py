# apen_contact/config.py  # Configuración del mailer y del servicio (variables de entorno).

# =================================================================================
# ⚙️ Configuración unificada
# ---------------------------------------------------------------------------------
# Host, puerto y seguridad SMTP son constantes del proveedor (Zoho SMTP Pro).
# Solo las credenciales y las dos direcciones vienen del entorno (.env), y se
# leen en tiempo de ejecución para que cada request vea el valor vigente.
# =================================================================================

from __future__ import annotations

import os
from typing import List

from pydantic import BaseModel

SMTP_HOST = "smtppro.zoho.com"                                     # Zoho Workplace (cuentas de organización).
SMTP_PORT = 465                                                    # TLS implícito al conectar (SMTPS), nunca STARTTLS.

FIRM_NAME = "Apen y Asociados"                                     # Remitente visible de la copia al cliente.
WEB_FORM_SENDER = "Formulario Web"                                 # Remitente visible de la copia al proveedor.

DEFAULT_CORS_ORIGINS = [
    "https://apenyasociados.com",                                  # Sitio en producción.
    "https://www.apenyasociados.com",
    "http://localhost:3000",                                       # Front local (dev).
    "http://127.0.0.1:3000",
]


class MailSettings(BaseModel):
    smtp_user: str = ""
    smtp_password: str = ""
    email_from: str = ""
    email_to_provider: str = ""
    smtp_timeout: float = 30.0
    dry_run: bool = False

    def missing_keys(self) -> List[str]:
        """Nombres de las variables obligatorias ausentes (nunca sus valores)."""
        pairs = (
            ("SMTP_USER", self.smtp_user),
            ("SMTP_PASSWORD", self.smtp_password),
            ("EMAIL_FROM", self.email_from),
            ("EMAIL_TO_PROVIDER", self.email_to_provider),
        )
        return [name for name, value in pairs if not value]


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:                                             # Valor inválido en .env → default.
        return default


def load_mail_settings() -> MailSettings:
    """Lee la configuración del mailer desde el entorno actual."""
    return MailSettings(
        smtp_user=os.getenv("SMTP_USER", "").strip(),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        email_from=os.getenv("EMAIL_FROM", "").strip(),
        email_to_provider=os.getenv("EMAIL_TO_PROVIDER", "").strip(),
        smtp_timeout=_env_float("SMTP_TIMEOUT", 30.0),
        dry_run=os.getenv("DRY_RUN", "0") == "1",
    )


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)
