# apen_contact/main.py                                                                          # Ruta y nombre del archivo principal de la API.

# ================================================================
# 🧱 MODO MANTENIMIENTO (Control temporal desde variable de entorno)
# ================================================================

import os

from dotenv import load_dotenv                                                                  # Carga variables desde .env.
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError                                           # JSON roto en /api/contact.
from fastapi.middleware.cors import CORSMiddleware                                              # Middleware CORS para orígenes permitidos.
from fastapi.responses import JSONResponse
from loguru import logger                                                                       # Logger para trazas al arrancar.

load_dotenv()                                                                                   # .env del directorio actual (no pisa el entorno real).


def create_maintenance_app() -> FastAPI:
    """App mínima: responde 503 bilingüe en cualquier ruta y método."""
    app = FastAPI(title="API en mantenimiento")

    @app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"])
    async def maintenance_page(path: str):
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "message": "El sitio está en mantenimiento. Vuelva más tarde. / The site is under maintenance. Please come back later.",
            },
        )

    logger.warning("🚧 API arrancada en MODO MANTENIMIENTO. Todos los endpoints reales están desactivados.")
    return app


# =================================================================================
# 🧠 NÚCLEO DE LA APLICACIÓN API (FastAPI)
# ---------------------------------------------------------------------------------
# - Crea la instancia de FastAPI
# - Configura CORS
# - Registra routers (contact, meta)
# =================================================================================
def create_app() -> FastAPI:
    if os.getenv("MAINTENANCE_MODE") == "1":
        return create_maintenance_app()

    from apen_contact import meta                                                               # Router de metadatos y salud.
    from apen_contact.config import cors_origins, load_mail_settings
    from apen_contact.routers import contact                                                    # Router del formulario.

    settings = load_mail_settings()
    logger.info(                                                                                # Variables clave para verificar configuración.
        "[BOOT] DRY_RUN={} | EMAIL_FROM={} | SMTP_USER_SET={} | PROVIDER_SET={}",
        settings.dry_run,
        settings.email_from or "<vacío>",
        "yes" if settings.smtp_user and settings.smtp_password else "no",                       # Nunca se loguea la contraseña.
        "yes" if settings.email_to_provider else "no",
    )

    app = FastAPI(
        title="API de contacto - Apen y Asociados",
        description="Backend del formulario de contacto: validación, correos bilingües y envío SMTP",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=False,                                                                # El formulario no usa cookies.
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(contact.router)
    app.add_exception_handler(RequestValidationError, contact.contact_body_error_handler)
    app.include_router(meta.router)
    return app


app = create_app()
