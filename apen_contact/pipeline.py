# apen_contact/pipeline.py  # Orquestación de una solicitud de contacto (validación → correos → respuesta).

# =================================================================================
# 🔁 Pipeline de contacto
# ---------------------------------------------------------------------------------
# received → validating → rejected
#                       → formatting → rendering → verifying → sending_client
#                         → sending_provider → succeeded
# Cualquier fallo tras validar → failed. Sin reintentos.
# Ningún error sale sin forma: todo termina en (status, ContactResponse) traducido.
# =================================================================================

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Tuple

from loguru import logger

from apen_contact.alerts import send_alert_webhook
from apen_contact.config import MailSettings
from apen_contact.errors import ConfigError, InputError, TransportError
from apen_contact.mailer import build_client_message, build_provider_message, create_mailer
from apen_contact.schemas import ContactRequest, ContactResponse
from apen_contact.utils.formatting import format_date, format_time
from apen_contact.utils.i18n import mask_email, messages_for
from apen_contact.validation import validate_submission

MailerFactory = Callable[[MailSettings], object]                     # Devuelve un objeto con verify/send/close.


class SubmissionState(str, Enum):
    received = "received"
    validating = "validating"
    rejected = "rejected"
    formatting = "formatting"
    rendering = "rendering"
    verifying = "verifying"
    sending_client = "sending_client"
    sending_provider = "sending_provider"
    succeeded = "succeeded"
    failed = "failed"


class ContactPipeline:
    """Procesa UNA solicitud de principio a fin; se instancia por request."""

    def __init__(self, settings: MailSettings, mailer_factory: Optional[MailerFactory] = None):
        self.settings = settings
        self.mailer_factory = mailer_factory or create_mailer
        self.state = SubmissionState.received

    def _move(self, state: SubmissionState, record: ContactRequest) -> None:
        logger.debug("[contact] {} → {} (email={})", self.state.value, state.value, mask_email(record.email))
        self.state = state

    def run(self, record: ContactRequest) -> Tuple[int, ContactResponse]:
        texts = messages_for(record.language)

        # 1) Validación: único filtro de los campos obligatorios.
        self._move(SubmissionState.validating, record)
        try:
            validate_submission(record)
        except InputError as e:
            self._move(SubmissionState.rejected, record)
            logger.info("[contact] Solicitud rechazada ({}) lang={}", e.reason, record.language)
            return e.status_code, ContactResponse(success=False, message=e.message)

        # 2) Configuración del mailer presente antes de cualquier conexión.
        missing = self.settings.missing_keys()
        if missing:
            self._move(SubmissionState.failed, record)
            err = ConfigError(missing)
            logger.error("Config de mailer incompleta: {}", err)
            send_alert_webhook("🚨 Formulario de contacto: configuración", str(err))
            return err.status_code, ContactResponse(success=False, message=texts.server_config)

        try:
            return self._deliver(record, texts)
        except TransportError as e:
            self._move(SubmissionState.failed, record)
            logger.exception("Error SMTP procesando solicitud de {}: {}", mask_email(record.email), e)
            send_alert_webhook("🚨 Formulario de contacto: SMTP", f"{e} (etapa={e.stage})")
            return e.status_code, ContactResponse(success=False, message=texts.generic_error)
        except Exception as e:                                       # Última red: nada cruza el límite de la request.
            self._move(SubmissionState.failed, record)
            logger.exception("Error inesperado en formulario de contacto: {}", e)
            return 500, ContactResponse(success=False, message=texts.generic_error)

    def _deliver(self, record: ContactRequest, texts) -> Tuple[int, ContactResponse]:
        self._move(SubmissionState.formatting, record)
        formatted_date = format_date(record.date, record.language)
        formatted_time = format_time(record.time)

        self._move(SubmissionState.rendering, record)
        client_msg = build_client_message(record, self.settings, formatted_date, formatted_time)
        provider_msg = build_provider_message(record, self.settings, formatted_date, formatted_time)

        mailer = self.mailer_factory(self.settings)
        try:
            self._move(SubmissionState.verifying, record)
            mailer.verify()

            # El cliente primero: si falla, el proveedor nunca se intenta.
            self._move(SubmissionState.sending_client, record)
            mailer.send(client_msg)
            logger.info("Confirmación enviada al cliente: {}", mask_email(client_msg.to))

            self._move(SubmissionState.sending_provider, record)
            mailer.send(provider_msg)
            logger.info("Notificación enviada al proveedor: {}", mask_email(provider_msg.to))
        finally:
            mailer.close()

        self._move(SubmissionState.succeeded, record)
        return 200, ContactResponse(success=True, message=texts.success)


def process_submission(
    record: ContactRequest,
    settings: MailSettings,
    mailer_factory: Optional[MailerFactory] = None,
) -> Tuple[int, ContactResponse]:
    """Atajo funcional: una solicitud, un pipeline nuevo."""
    return ContactPipeline(settings, mailer_factory).run(record)
