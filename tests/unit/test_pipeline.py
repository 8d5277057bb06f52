# tests/unit/test_pipeline.py  # Máquina de estados de una solicitud de contacto.

import pytest

from apen_contact.config import MailSettings
from apen_contact.pipeline import ContactPipeline, SubmissionState, process_submission
from apen_contact.schemas import ContactRequest
from apen_contact.utils.i18n import RESPONSE_MESSAGES
from conftest import FakeMailerFactory


def _record(payload, **overrides):
    return ContactRequest.model_validate({**payload, **overrides})


def test_success_sends_client_then_provider(valid_payload, mail_settings):
    factory = FakeMailerFactory()
    pipeline = ContactPipeline(mail_settings, factory)
    status, body = pipeline.run(_record(valid_payload))

    assert status == 200
    assert body.success is True
    assert body.message == RESPONSE_MESSAGES["es"].success
    assert pipeline.state is SubmissionState.succeeded
    mailer = factory.last
    assert mailer.calls == ["verify", "send_client", "send_provider", "close"]
    assert [m.to for m in mailer.sent] == ["juan@example.com", mail_settings.email_to_provider]


def test_invalid_input_never_builds_a_mailer(valid_payload, mail_settings):
    factory = FakeMailerFactory()
    pipeline = ContactPipeline(mail_settings, factory)
    status, body = pipeline.run(_record(valid_payload, email="not-an-email", language="en"))

    assert status == 400
    assert body.success is False
    assert body.message == RESPONSE_MESSAGES["en"].invalid_email
    assert pipeline.state is SubmissionState.rejected
    assert factory.created == []


@pytest.mark.parametrize("missing", ["smtp_user", "smtp_password", "email_from", "email_to_provider"])
def test_missing_configuration_is_a_generic_500(valid_payload, mail_settings, missing):
    settings = mail_settings.model_copy(update={missing: ""})
    factory = FakeMailerFactory()
    pipeline = ContactPipeline(settings, factory)
    status, body = pipeline.run(_record(valid_payload))

    assert status == 500
    assert body.message == RESPONSE_MESSAGES["es"].server_config
    assert "SMTP" not in body.message and "EMAIL" not in body.message
    assert pipeline.state is SubmissionState.failed
    assert factory.created == []


def test_verify_failure_sends_nothing(valid_payload, mail_settings):
    factory = FakeMailerFactory(fail_on="verify")
    status, body = process_submission(_record(valid_payload, language="en"), mail_settings, factory)

    assert status == 500
    assert body.message == RESPONSE_MESSAGES["en"].generic_error
    assert "535" not in body.message
    assert factory.last.calls == ["verify", "close"]
    assert factory.last.sent == []


def test_client_failure_skips_provider(valid_payload, mail_settings):
    factory = FakeMailerFactory(fail_on="send_client")
    status, body = process_submission(_record(valid_payload), mail_settings, factory)

    assert status == 500
    assert body.message == RESPONSE_MESSAGES["es"].generic_error
    assert factory.last.calls == ["verify", "send_client", "close"]


def test_provider_failure_is_reported_as_failure(valid_payload, mail_settings):
    factory = FakeMailerFactory(fail_on="send_provider")
    pipeline = ContactPipeline(mail_settings, factory)
    status, body = pipeline.run(_record(valid_payload))

    assert status == 500
    assert body.success is False
    assert pipeline.state is SubmissionState.failed
    assert [m.to for m in factory.last.sent] == ["juan@example.com"]   # el cliente ya recibió su copia
    assert factory.last.closed


def test_unexpected_error_is_shaped(valid_payload, mail_settings):
    def exploding_factory(settings: MailSettings):
        raise KeyError("boom")

    status, body = process_submission(_record(valid_payload), mail_settings, exploding_factory)
    assert status == 500
    assert body.message == RESPONSE_MESSAGES["es"].generic_error


def test_transport_failure_notifies_alert_webhook(monkeypatch, valid_payload, mail_settings):
    alerts = []
    monkeypatch.setattr("apen_contact.pipeline.send_alert_webhook", lambda title, msg: alerts.append((title, msg)))
    process_submission(_record(valid_payload), mail_settings, FakeMailerFactory(fail_on="verify"))
    assert len(alerts) == 1
    assert "verify" in alerts[0][1]


def test_dry_run_settings_use_simulated_transport(valid_payload, mail_settings):
    settings = mail_settings.model_copy(update={"dry_run": True})
    status, body = process_submission(_record(valid_payload), settings)
    assert status == 200
    assert body.success is True


def test_out_of_range_year_still_delivers_with_raw_date(valid_payload, mail_settings):
    factory = FakeMailerFactory()
    status, body = process_submission(_record(valid_payload, date="99999999999-01-15"), mail_settings, factory)

    assert status == 200
    assert body.success is True
    client_msg, _ = factory.last.sent
    assert "99999999999-01-15" in client_msg.html_body
