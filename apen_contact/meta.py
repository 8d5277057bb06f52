# apen_contact/meta.py  # Router de metadatos para el frontend.

from typing import Dict

from fastapi import APIRouter  # Enrutador de FastAPI para rutas simples.

from apen_contact.schemas import MetaOptions, ServiceOption
from apen_contact.utils.i18n import SUPPORTED_LANGS

router = APIRouter(prefix="/api", tags=["meta"])

# Catálogo del select "Servicio" del formulario (el correo recibe la etiqueta, no el código).
SERVICES = [
    ServiceOption(code="auditoria", label_es="Auditoría", label_en="Audit"),
    ServiceOption(code="asesoria", label_es="Asesoría", label_en="Advisory"),
    ServiceOption(code="consultoria", label_es="Consultoría", label_en="Consulting"),
    ServiceOption(code="talento", label_es="Capital Humano", label_en="Human Capital"),
    ServiceOption(code="especiales", label_es="Servicios Especiales", label_en="Special Services"),
]


@router.get("/meta/options", response_model=MetaOptions)
def get_meta_options() -> MetaOptions:
    """Idiomas soportados y servicios con sus etiquetas en ambos idiomas."""
    return MetaOptions(languages=list(SUPPORTED_LANGS), services=SERVICES)


@router.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}
