# apen_contact/schemas.py  # Esquemas Pydantic del formulario de contacto.            # Indica dónde va este archivo en el proyecto.

# =================================================================================
# 📦 Schemas (MODELOS DE DATOS Pydantic)
# ---------------------------------------------------------------------------------
# - ContactRequest: la solicitud de cita tal como llega del navegador.
# - OutboundMessage: un correo ya renderizado y listo para el transporte SMTP.
# - ContactResponse: cuerpo JSON que devuelve el endpoint.
# Los campos de ContactRequest NO se validan aquí como obligatorios: se normalizan
# a texto y es validation.py quien decide (con mensaje traducido) si faltan.
# =================================================================================

from typing import Any, List, Literal, Optional                                          # Tipos para anotar opcionales, listas y literales.

from pydantic import BaseModel, ConfigDict, Field, field_validator                      # Utilidades principales de Pydantic v2.

from apen_contact.utils.i18n import DEFAULT_LANG, _base_lang                             # Normalización de idioma compartida.

LanguageLiteral = Literal["es", "en"]                                                    # Conjunto de idiomas válidos del sitio.

REQUIRED_FIELDS = ("name", "email", "phone", "service", "date", "time")                 # Campos obligatorios (todos salvo message).


# =================================================================================
# 📝 Solicitud de cita (entrada)
# =================================================================================
class ContactRequest(BaseModel):                                                         # Registro de una solicitud de contacto.
    name: str = ""                                                                       # Nombre del cliente.
    email: str = ""                                                                      # Email del cliente (se valida en validation.py).
    phone: str = ""                                                                      # Teléfono (sin formato impuesto).
    service: str = ""                                                                    # Etiqueta legible del servicio (no un código).
    date: str = ""                                                                       # Fecha preferida 'YYYY-MM-DD'.
    time: str = ""                                                                       # Hora preferida 'HH:MM' (24h).
    message: Optional[str] = None                                                        # Mensaje libre opcional.
    language: LanguageLiteral = DEFAULT_LANG                                             # Idioma con el que el cliente usó el sitio.

    model_config = ConfigDict(frozen=True, extra="ignore")                               # Inmutable una vez construido; ignora campos extra.

    @field_validator("name", "email", "phone", "service", "date", "time", mode="before")
    @classmethod
    def _as_clean_text(cls, v: Any) -> str:                                              # Convierte null/números a texto limpio.
        if v is None:                                                                    # Campo ausente o null...
            return ""                                                                    # ...queda vacío (validation.py lo reporta).
        if isinstance(v, (int, float)) and not isinstance(v, bool):                      # Teléfonos enviados como número.
            return str(v)
        if not isinstance(v, str):                                                       # Listas/objetos no son texto válido.
            return ""
        return v.strip()                                                                 # Quita espacios incidentales.

    @field_validator("message", mode="before")
    @classmethod
    def _clean_message(cls, v: Any) -> Optional[str]:                                    # Mensaje vacío → None.
        if not isinstance(v, str):
            return None
        v = v.strip()
        return v or None

    @field_validator("language", mode="before")
    @classmethod
    def _normalize_language(cls, v: Any) -> str:                                         # 'es-GT' → 'es'; desconocido → 'es'.
        return _base_lang(v) or DEFAULT_LANG

    def missing_fields(self) -> List[str]:
        """Lista los campos obligatorios que llegaron vacíos."""
        return [f for f in REQUIRED_FIELDS if not getattr(self, f)]


# =================================================================================
# ✉️ Correo saliente (uno por destinatario)
# =================================================================================
class OutboundMessage(BaseModel):
    to: str                                                                              # Destinatario.
    sender_name: str                                                                     # Nombre visible del remitente.
    sender_address: str                                                                  # Dirección From.
    subject: str                                                                         # Asunto ya traducido.
    html_body: str                                                                       # Documento HTML completo.
    text_body: str = ""                                                                  # Alternativa en texto plano.
    reply_to: Optional[str] = None                                                       # Solo en la copia al proveedor.

    model_config = ConfigDict(frozen=True)


# =================================================================================
# 📤 Respuesta del endpoint
# =================================================================================
class ContactResponse(BaseModel):
    success: bool
    message: str


class ServiceOption(BaseModel):                                                          # Opción del select de servicios.
    code: str
    label_es: str
    label_en: str


class MetaOptions(BaseModel):
    languages: List[str] = Field(default_factory=list)
    services: List[ServiceOption] = Field(default_factory=list)
