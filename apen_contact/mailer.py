# apen_contact/mailer.py  # Ruta y nombre del archivo.                                   # Indica el nombre del módulo y su ubicación.

# =================================================================================
# 📧 MÓDULO DE ENVÍO DE CORREOS (Zoho SMTP Pro, HTML + texto)
# ---------------------------------------------------------------------------------
# - SmtpMailer: conexión SMTPS (TLS implícito, puerto 465) con verify/send/close.
# - DryRunMailer: simula verify/send con logs (DRY_RUN=1, desarrollo local).
# - build_*_message: arma los dos OutboundMessage de una solicitud de contacto.
# El transporte se crea por request a partir de MailSettings (nunca es global).
# =================================================================================

# 🐍 Importaciones
from __future__ import annotations                                                     # Anotaciones pospuestas.

import smtplib                                                                         # Envío SMTP.
import ssl                                                                             # Contexto TLS seguro y errores de handshake.
from email.mime.multipart import MIMEMultipart                                         # Contenedor del mensaje (headers + partes).
from email.mime.text import MIMEText                                                   # Cuerpo de texto/HTML.
from email.utils import formataddr, make_msgid                                         # From con nombre visible y Message-ID.
from typing import Callable, List, Optional

from loguru import logger                                                              # Logger estructurado para trazas legibles.

from apen_contact.config import FIRM_NAME, SMTP_HOST, SMTP_PORT, WEB_FORM_SENDER, MailSettings
from apen_contact.email_templates import (
    client_subject,
    provider_subject,
    render_client_email,
    render_client_text,
    render_provider_email,
    render_provider_text,
)
from apen_contact.errors import TransportError
from apen_contact.schemas import ContactRequest, OutboundMessage
from apen_contact.utils.i18n import mask_email

# Excepciones que se traducen a TransportError (auth, red, TLS, timeouts).
_TRANSPORT_EXCEPTIONS = (smtplib.SMTPException, OSError)                               # OSError cubre socket, ssl.SSLError y timeouts.


def build_mime(message: OutboundMessage) -> MIMEMultipart:
    """multipart/alternative: texto plano primero, HTML después (mejor deliverability)."""
    msg = MIMEMultipart("alternative")                                                 # Contenedor multiparte.
    msg["From"] = formataddr((message.sender_name, message.sender_address))            # Remitente con nombre.
    msg["To"] = message.to.strip()                                                     # Limpia destinatario.
    if message.reply_to:                                                               # Reply-To solo en la copia al proveedor.
        msg["Reply-To"] = message.reply_to
    msg["Subject"] = message.subject
    domain = message.sender_address.rsplit("@", 1)[-1] or None
    msg["Message-ID"] = make_msgid(domain=domain)
    if message.text_body:
        msg.attach(MIMEText(message.text_body, "plain", "utf-8"))
    msg.attach(MIMEText(message.html_body, "html", "utf-8"))
    return msg


# =================================================================================
# ✉️ Transporte SMTP real
# =================================================================================
class SmtpMailer:
    """Una conexión autenticada contra smtppro.zoho.com:465 para una sola request."""

    def __init__(self, settings: MailSettings, smtp_factory: Optional[Callable[..., smtplib.SMTP]] = None):
        self.settings = settings
        self._smtp_factory = smtp_factory
        self._server: Optional[smtplib.SMTP] = None

    def verify(self) -> None:
        """Conecta con TLS implícito y autentica; TransportError si falla."""
        logger.info("Intentando conexión SMTP a {}:{}", SMTP_HOST, SMTP_PORT)
        try:
            factory = self._smtp_factory or smtplib.SMTP_SSL                          # Se resuelve en cada llamada.
            server = factory(
                host=SMTP_HOST,
                port=SMTP_PORT,
                timeout=self.settings.smtp_timeout,                                    # Timeout del transporte (sin reintentos).
                context=ssl.create_default_context(),                                  # Verifica certificado y hostname.
            )
        except _TRANSPORT_EXCEPTIONS as e:
            raise TransportError("verify", f"{type(e).__name__}: {e}") from e

        try:
            server.login(self.settings.smtp_user, self.settings.smtp_password)        # Autenticación usuario/contraseña.
        except _TRANSPORT_EXCEPTIONS as e:
            self._quit(server)
            raise TransportError("verify", f"{type(e).__name__}: {e}") from e

        self._server = server
        logger.info("Conexión SMTP verificada correctamente")

    def send(self, message: OutboundMessage) -> None:
        """Transmite un mensaje por la conexión verificada; TransportError si falla."""
        if self._server is None:
            raise RuntimeError("SmtpMailer.send() llamado antes de verify()")
        msg = build_mime(message)
        try:
            refused = self._server.sendmail(message.sender_address, [msg["To"]], msg.as_string())
        except _TRANSPORT_EXCEPTIONS as e:
            raise TransportError("send", f"{type(e).__name__}: {e}", recipient=message.to) from e
        if refused:                                                                    # sendmail devuelve los rechazados.
            raise TransportError("send", f"destinatario rechazado: {refused}", recipient=message.to)
        logger.info("SMTP → enviado a {}", mask_email(message.to))

    def close(self) -> None:
        if self._server is not None:
            self._quit(self._server)
            self._server = None

    @staticmethod
    def _quit(server: smtplib.SMTP) -> None:
        try:
            server.quit()
        except _TRANSPORT_EXCEPTIONS as e:                                             # La conexión ya pudo haberse caído.
            logger.debug("SMTP quit ignorado: {}", e)

    def __enter__(self) -> "SmtpMailer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


# =================================================================================
# 🧪 Transporte simulado (DRY_RUN=1)
# =================================================================================
class DryRunMailer:
    """Mismo contrato que SmtpMailer, pero solo registra lo que enviaría."""

    def __init__(self, settings: MailSettings):
        self.settings = settings
        self.sent: List[OutboundMessage] = []

    def verify(self) -> None:
        logger.info("[DRY_RUN] Simular verificación SMTP {}:{} (user={})", SMTP_HOST, SMTP_PORT, mask_email(self.settings.smtp_user))

    def send(self, message: OutboundMessage) -> None:
        self.sent.append(message)
        # Solo un fragmento del texto para no saturar logs.
        logger.info("[DRY_RUN] (HTML) Simular envío a {} | Asunto: {}\n{}...", mask_email(message.to), message.subject, message.text_body[:160])

    def close(self) -> None:
        pass

    def __enter__(self) -> "DryRunMailer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def create_mailer(settings: MailSettings):
    """Fábrica por defecto: DryRunMailer si DRY_RUN=1, si no SmtpMailer."""
    if settings.dry_run:
        return DryRunMailer(settings)
    return SmtpMailer(settings)


# =================================================================================
# 🧩 Helpers de alto nivel: los dos correos de una solicitud
# =================================================================================
def build_client_message(record: ContactRequest, settings: MailSettings, formatted_date: str, formatted_time: str) -> OutboundMessage:
    """Confirmación al cliente, en su idioma."""
    return OutboundMessage(
        to=record.email,
        sender_name=FIRM_NAME,
        sender_address=settings.email_from,
        subject=client_subject(record.language),
        html_body=render_client_email(record, formatted_date, formatted_time),
        text_body=render_client_text(record, formatted_date, formatted_time),
    )


def build_provider_message(record: ContactRequest, settings: MailSettings, formatted_date: str, formatted_time: str) -> OutboundMessage:
    """Aviso interno en español; Reply-To apunta al cliente."""
    return OutboundMessage(
        to=settings.email_to_provider,
        sender_name=WEB_FORM_SENDER,
        sender_address=settings.email_from,
        reply_to=record.email,
        subject=provider_subject(record),
        html_body=render_provider_email(record, formatted_date, formatted_time),
        text_body=render_provider_text(record, formatted_date, formatted_time),
    )
