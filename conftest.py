# conftest.py
# -------------------------------------------------------------------------------------
# Archivo: conftest.py (raíz del proyecto)
# Propósito: Fixtures compartidas de pytest para el backend de contacto.
#            - Entorno SMTP completo (o vacío) vía monkeypatch, sin tocar el .env real.
#            - FakeMailer: registra verify/send/close y puede fallar a demanda.
#            - TestClient de FastAPI con la fábrica de mailer sobrescrita.
#            - Reinicio del rate limit entre tests.
# -------------------------------------------------------------------------------------

from __future__ import annotations  # Permite anotaciones de tipos adelantadas

from typing import List, Optional   # Para anotar listas y opcionales

import pytest                       # Framework de testing

from apen_contact import rate_limit
from apen_contact.config import MailSettings
from apen_contact.errors import TransportError

# =========================
# Configuración por defecto
# =========================
SMTP_ENV = {
    "SMTP_USER": "noreply@apenyasociados.com",
    "SMTP_PASSWORD": "app-password-123",
    "EMAIL_FROM": "noreply@apenyasociados.com",
    "EMAIL_TO_PROVIDER": "citas@apenyasociados.com",
}

VALID_PAYLOAD = {
    "name": "Juan Pérez",
    "email": "juan@example.com",
    "phone": "555-1234",
    "service": "Auditoría",
    "date": "2026-03-10",
    "time": "14:00",
    "language": "es",
}


# =====================
# Transporte simulado
# =====================
class FakeMailer:
    """Imita SmtpMailer: guarda el orden de llamadas y falla donde se le pida."""

    def __init__(self, settings: MailSettings, fail_on: Optional[str] = None):
        self.settings = settings
        self.fail_on = fail_on          # None | 'verify' | 'send_client' | 'send_provider'
        self.calls: List[str] = []
        self.sent = []
        self.closed = False

    def verify(self) -> None:
        self.calls.append("verify")
        if self.fail_on == "verify":
            raise TransportError("verify", "SMTPAuthenticationError: (535, b'Authentication Failed')")

    def send(self, message) -> None:
        kind = "send_provider" if message.to == self.settings.email_to_provider else "send_client"
        self.calls.append(kind)
        if self.fail_on == kind:
            raise TransportError("send", "SMTPServerDisconnected: Connection unexpectedly closed", recipient=message.to)
        self.sent.append(message)

    def close(self) -> None:
        self.calls.append("close")
        self.closed = True


class FakeMailerFactory:
    """Fábrica que recuerda los mailers creados (uno por request)."""

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.created: List[FakeMailer] = []

    def __call__(self, settings: MailSettings) -> FakeMailer:
        mailer = FakeMailer(settings, fail_on=self.fail_on)
        self.created.append(mailer)
        return mailer

    @property
    def last(self) -> Optional[FakeMailer]:
        return self.created[-1] if self.created else None


# ===========================
# Fixtures
# ===========================
@pytest.fixture(autouse=True)
def _reset_rate_limit(monkeypatch):
    """Cada test empieza con los cubos vacíos y sin límite (salvo que el test lo fije)."""
    monkeypatch.setenv("CONTACT_RATE_MAX", "0")
    monkeypatch.delenv("ALERT_WEBHOOK_URL", raising=False)
    monkeypatch.delenv("DRY_RUN", raising=False)
    rate_limit.reset()
    yield
    rate_limit.reset()


@pytest.fixture
def smtp_env(monkeypatch):
    for key, value in SMTP_ENV.items():
        monkeypatch.setenv(key, value)
    return dict(SMTP_ENV)


@pytest.fixture
def no_smtp_env(monkeypatch):
    for key in SMTP_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mail_settings() -> MailSettings:
    return MailSettings(
        smtp_user=SMTP_ENV["SMTP_USER"],
        smtp_password=SMTP_ENV["SMTP_PASSWORD"],
        email_from=SMTP_ENV["EMAIL_FROM"],
        email_to_provider=SMTP_ENV["EMAIL_TO_PROVIDER"],
        smtp_timeout=5.0,
    )


@pytest.fixture
def valid_payload() -> dict:
    return dict(VALID_PAYLOAD)


@pytest.fixture
def fake_factory() -> FakeMailerFactory:
    return FakeMailerFactory()


@pytest.fixture
def make_client(fake_factory):
    """Devuelve un constructor de TestClient con la fábrica de mailer indicada."""
    from fastapi.testclient import TestClient

    from apen_contact.main import create_app
    from apen_contact.routers.contact import get_mailer_factory

    apps = []

    def _make(factory=None):
        app = create_app()
        app.dependency_overrides[get_mailer_factory] = lambda: (factory or fake_factory)
        apps.append(app)
        return TestClient(app)

    yield _make
    for app in apps:
        app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, smtp_env):
    return make_client()
