# apen_contact/utils/i18n.py                                                      # Módulo central de idioma y mensajes de respuesta.

from __future__ import annotations                                                # Habilita anotaciones pospuestas.

from dataclasses import dataclass                                                 # Estructuras inmutables para las tablas de textos.

# =================================================================================
# 🔤 Resolución de idioma: payload normalizado > default ('es')
# =================================================================================

SUPPORTED_LANGS = ("es", "en")                                                    # Idiomas del sitio (español primero: idioma por defecto).
DEFAULT_LANG = "es"                                                               # Fallback acordado para el formulario.


def _base_lang(code: str | None) -> str | None:                                   # Normaliza un código de idioma potencialmente regional.
    """Normaliza 'es-GT', 'EN', 'en-US;q=0.8' a 'es'/'en'; None si no está soportado."""
    if not code or not isinstance(code, str):                                     # Si no hay valor (o no es texto)...
        return None                                                               # ...no hay candidato.
    code = code.strip().lower()                                                   # Limpia espacios y pasa a minúsculas.
    if not code:                                                                  # Si quedó vacío tras limpiar...
        return None
    primary = code.split(",")[0].split(";")[0].strip()                            # Primer item antes de coma o ;q= (formato de header).
    primary = primary.replace("_", "-").split("-")[0]                             # Subtipo primario ('es' de 'es-GT' o 'es_GT').
    return primary if primary in SUPPORTED_LANGS else None                        # Base si está soportado; si no, None.


def resolve_lang(payload_lang: str | None, accept_language_header: str | None = None) -> str:
    """Resuelve y devuelve siempre un idioma soportado ('es'/'en')."""
    cand = _base_lang(payload_lang)                                               # 1) Idioma explícito del formulario.
    if cand:
        return cand
    cand = _base_lang(accept_language_header)                                     # 2) Cabecera Accept-Language del navegador.
    if cand:
        return cand
    return DEFAULT_LANG                                                           # 3) Fallback estable.


# =================================================================================
# 💬 Mensajes de respuesta del endpoint de contacto (uno por idioma)
# =================================================================================

@dataclass(frozen=True)
class ResponseMessages:
    """Textos que el endpoint devuelve al navegador, ya traducidos."""
    missing_fields: str
    invalid_email: str
    server_config: str
    generic_error: str
    rate_limited: str
    success: str


RESPONSE_MESSAGES: dict[str, ResponseMessages] = {
    "es": ResponseMessages(
        missing_fields="Por favor complete todos los campos requeridos.",
        invalid_email="Por favor ingrese un correo electrónico válido.",
        server_config="Error de configuración del servidor. Por favor intente más tarde.",
        generic_error="Ocurrió un error al procesar su solicitud. Por favor intente más tarde.",
        rate_limited="Demasiadas solicitudes. Por favor intente más tarde.",
        success="Su solicitud ha sido enviada exitosamente. Revise su correo electrónico para la confirmación.",
    ),
    "en": ResponseMessages(
        missing_fields="Please fill in all required fields.",
        invalid_email="Please enter a valid email address.",
        server_config="Server configuration error. Please try again later.",
        generic_error="An error occurred while processing your request. Please try again later.",
        rate_limited="Too many requests. Please try again later.",
        success="Your request has been sent successfully. Check your email for confirmation.",
    ),
}


def messages_for(lang_code: str | None) -> ResponseMessages:
    """Devuelve la tabla de mensajes del idioma (o la de 'es' si no existe)."""
    return RESPONSE_MESSAGES.get(lang_code or DEFAULT_LANG, RESPONSE_MESSAGES[DEFAULT_LANG])


def mask_email(addr: str | None) -> str:                                          # Enmascara emails para los logs.
    """'juan@example.com' → 'ju***@example.com'."""
    if not addr:
        return "<no-email>"
    addr = addr.strip()
    if "@" not in addr or len(addr) < 3:                                          # Sin @ o muy corto: enmascara parcial.
        return addr[:2] + "***"
    name, dom = addr.split("@", 1)
    return name[:2] + "***@" + dom
