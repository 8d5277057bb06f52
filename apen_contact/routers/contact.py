# apen_contact/routers/contact.py  # Router del formulario de contacto.                          # Ubicación del router.

# =================================================================================
# 📨 POST /api/contact · Solicitud de cita desde el sitio web
# ---------------------------------------------------------------------------------
# 200 {success: true}  · correos al cliente y al proveedor enviados.
# 400 {success: false} · campos faltantes, email inválido o cuerpo ilegible (sin conexión SMTP).
# 429 {success: false} · demasiadas solicitudes desde la misma IP.
# 500 {success: false} · configuración ausente o fallo SMTP (detalle solo en logs).
# =================================================================================

from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request                                      # Router y utilidades de FastAPI.
from fastapi.exception_handlers import request_validation_exception_handler                # Handler 422 por defecto (otras rutas).
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse                                                 # Respuesta con status explícito.
from loguru import logger

from apen_contact import rate_limit                                                        # Ventana deslizante por IP.
from apen_contact.config import MailSettings, load_mail_settings
from apen_contact.mailer import create_mailer
from apen_contact.pipeline import process_submission
from apen_contact.schemas import ContactRequest, ContactResponse
from apen_contact.utils.i18n import messages_for, resolve_lang

router = APIRouter(                                                                        # Router modular de FastAPI.
    prefix="/api",
    tags=["contact"],
)

CONTACT_PATH = "/api/contact"


# 🛠️ Dependencias (sobrescribibles en tests con app.dependency_overrides)
def get_mail_settings() -> MailSettings:
    return load_mail_settings()                                                            # Se lee por request: refleja el .env vigente.


def get_mailer_factory() -> Callable[[MailSettings], Any]:
    return create_mailer


def _client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")                                # Detrás de proxy (Vercel/NGINX).
    ip = forwarded.split(",")[0].strip() if forwarded else (request.client.host if request.client else "unknown")
    return f"{ip}:{request.url.path}"


@router.post("/contact", response_model=ContactResponse)
def submit_contact(                                                                        # Sync: corre en el threadpool (SMTP bloqueante).
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(default=None),                                # JSON crudo: la validación es nuestra, no un 422.
    settings: MailSettings = Depends(get_mail_settings),
    mailer_factory: Callable[[MailSettings], Any] = Depends(get_mailer_factory),
):
    data = dict(payload or {})
    data["language"] = resolve_lang(data.get("language"), request.headers.get("accept-language"))  # Formulario > navegador > 'es'.
    record = ContactRequest.model_validate(data)                                          # Normaliza a texto; nunca falla por campos.

    max_req, window = rate_limit.get_limits_from_env("CONTACT_RATE", 5, 600)
    if not rate_limit.is_allowed(_client_key(request), max_req, window):
        return JSONResponse(
            status_code=429,
            content=ContactResponse(success=False, message=messages_for(record.language).rate_limited).model_dump(),
        )

    logger.info("[contact] Nueva solicitud lang={} service={}", record.language, record.service or "<vacío>")
    status_code, body = process_submission(record, settings, mailer_factory)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# =================================================================================
# 🧯 Cuerpo ilegible (JSON roto o que no es un objeto)
# ---------------------------------------------------------------------------------
# FastAPI lo rechaza antes de llegar a la ruta; aquí se le da la misma forma
# {success, message} que al resto de respuestas del formulario.
# =================================================================================
async def contact_body_error_handler(request: Request, exc: RequestValidationError):
    if request.url.path != CONTACT_PATH:                                                   # Otras rutas: 422 estándar de FastAPI.
        return await request_validation_exception_handler(request, exc)

    lang = resolve_lang(None, request.headers.get("accept-language"))                     # Sin cuerpo legible solo queda el navegador.
    logger.warning("[contact] Cuerpo ilegible rechazado: {}", [e.get("type") for e in exc.errors()])
    return JSONResponse(
        status_code=400,
        content=ContactResponse(success=False, message=messages_for(lang).missing_fields).model_dump(),
    )
