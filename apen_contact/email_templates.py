# apen_contact/email_templates.py  # Plantillas HTML (y texto) de los correos de contacto.

# =================================================================================
# 🌐 Plantillas de correo (i18n)
# ---------------------------------------------------------------------------------
# - Confirmación al cliente: en el idioma con el que usó el sitio (es/en).
# - Notificación al proveedor: SIEMPRE en español, con badge del idioma del cliente.
# Maquetación con tablas y estilos inline (compatible con clientes de correo).
# Todo valor escrito por el usuario pasa por html.escape antes de interpolarse.
# =================================================================================

from __future__ import annotations

import html
from dataclasses import dataclass
from urllib.parse import quote

from apen_contact.config import FIRM_NAME
from apen_contact.schemas import ContactRequest

# 🎨 Paleta del sitio
COLORS = {
    "primary": "#12ACA4",                                           # Turquesa.
    "secondary": "#17383F",                                         # Verde oscuro.
    "background": "#F4F7F6",
    "white": "#FFFFFF",
    "text": "#333333",
    "text_light": "#666666",
    "border": "#E0E0E0",
    "muted": "#999999",
}

LOGO_URL = "https://apenyasociados.com/logo-white.png"
FIRM_PHONE = "4386 5000"
FIRM_EMAIL = "info@apenyasociados.com"
FIRM_ADDRESS = "Edificio Campus Tecnológico - TEC, Torre I, Cdad. de Guatemala"
REPLY_SUBJECT = f"Re: Solicitud de Cita - {FIRM_NAME}"

CLIENT_SUBJECTS = {
    "es": f"Confirmación de Solicitud - {FIRM_NAME}",
    "en": f"Request Confirmation - {FIRM_NAME}",
}

LANGUAGE_BADGES = {"es": "Español", "en": "English"}


# =================================================================================
# 🧾 Etiquetas del correo al cliente (una estructura por idioma)
# =================================================================================
@dataclass(frozen=True)
class ClientLabels:
    greeting: str
    thank_you: str
    received: str
    request_details: str
    service: str
    preferred_date: str
    preferred_time: str
    message: str
    questions: str
    regards: str
    team: str
    tagline: str
    phone: str
    confidentiality: str


CLIENT_LABELS = {
    "es": ClientLabels(
        greeting="Estimado/a",
        thank_you=f"Gracias por contactar a {FIRM_NAME}",
        received=(
            "Hemos recibido su solicitud de cita y un miembro de nuestro equipo se pondrá en contacto "
            "con usted a la brevedad para confirmar los detalles."
        ),
        request_details="DETALLES DE SU SOLICITUD",
        service="SERVICIO",
        preferred_date="FECHA PREFERIDA",
        preferred_time="HORA PREFERIDA",
        message="MENSAJE",
        questions="Si tiene alguna pregunta antes de nuestra llamada, no dude en responder a este correo.",
        regards="Atentamente",
        team=f"El Equipo de {FIRM_NAME}",
        tagline="AUDITORES Y CONSULTORES",
        phone="Teléfono",
        confidentiality=(
            "AVISO DE CONFIDENCIALIDAD: Este correo electrónico y cualquier archivo adjunto son confidenciales "
            "y están destinados únicamente para el uso del destinatario. Si ha recibido este mensaje por error, "
            "por favor notifique al remitente y elimínelo de su sistema."
        ),
    ),
    "en": ClientLabels(
        greeting="Dear",
        thank_you=f"Thank you for contacting {FIRM_NAME}",
        received=(
            "We have received your appointment request and a member of our team will contact you shortly "
            "to confirm the details."
        ),
        request_details="YOUR REQUEST DETAILS",
        service="SERVICE",
        preferred_date="PREFERRED DATE",
        preferred_time="PREFERRED TIME",
        message="MESSAGE",
        questions="If you have any questions before our call, please don't hesitate to reply to this email.",
        regards="Best regards",
        team=f"The {FIRM_NAME} Team",
        tagline="AUDITORS & CONSULTANTS",
        phone="Phone",
        confidentiality=(
            "CONFIDENTIALITY NOTICE: This email and any attachments are confidential and intended solely for "
            "the use of the addressee. If you have received this message in error, please notify the sender "
            "and delete it from your system."
        ),
    ),
}


def client_subject(language: str) -> str:
    return CLIENT_SUBJECTS.get(language, CLIENT_SUBJECTS["es"])


def provider_subject(record: ContactRequest) -> str:
    """Asunto fijo en español: 'Nueva Solicitud: <nombre> | <servicio> | <fecha>'."""
    parts = (" ".join(v.split()) for v in (record.name, record.service, record.date))   # Sin saltos de línea en el header.
    return "Nueva Solicitud: " + " | ".join(parts)


def _esc(value: str | None) -> str:
    return html.escape(value or "", quote=True)


def _mailto(address: str, subject: str | None = None) -> str:
    """Construye un href mailto: seguro (dirección y asunto percent-encoded)."""
    href = "mailto:" + quote(address, safe="@.+-_")
    if subject:
        href += "?subject=" + quote(subject, safe="")
    return _esc(href)


def _tel(phone: str) -> str:
    return _esc("tel:" + quote(phone, safe="+-() "))


def _document(lang: str, title: str, body_rows: str) -> str:
    """Esqueleto común: fondo, tarjeta central de 600px y filas del cuerpo."""
    c = COLORS
    return f"""<!DOCTYPE html>
<html lang="{lang}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
</head>
<body style="margin: 0; padding: 0; background-color: {c['background']}; font-family: Arial, sans-serif;">
  <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0" style="background-color: {c['background']};">
    <tr>
      <td align="center" style="padding: 40px 20px;">
        <table role="presentation" width="600" cellspacing="0" cellpadding="0" border="0" style="max-width: 600px; width: 100%; background-color: {c['white']}; border: 1px solid {c['border']}; border-radius: 8px; overflow: hidden;">
{body_rows}
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""


# =================================================================================
# 📩 Confirmación al cliente
# =================================================================================
def _client_detail_row(label: str, value_html: str, first: bool = False) -> str:
    c = COLORS
    width = " width: 40%;" if first else ""
    return f"""                      <tr>
                        <td style="padding: 8px 0; vertical-align: top;{width}">
                          <span style="color: {c['primary']}; font-size: 12px; font-weight: 600;">{label}:</span>
                        </td>
                        <td style="padding: 8px 0; vertical-align: top;">
                          <span style="color: {c['text']}; font-size: 15px;">{value_html}</span>
                        </td>
                      </tr>"""


def render_client_email(record: ContactRequest, formatted_date: str, formatted_time: str) -> str:
    """Documento HTML de confirmación para el cliente, en su idioma."""
    lang = record.language if record.language in CLIENT_LABELS else "es"
    labels = CLIENT_LABELS[lang]
    c = COLORS

    details = [
        _client_detail_row(labels.service, _esc(record.service), first=True),
        _client_detail_row(labels.preferred_date, _esc(formatted_date)),
        _client_detail_row(labels.preferred_time, _esc(formatted_time)),
    ]
    if record.message:
        details.append(_client_detail_row(labels.message, _esc(record.message).replace("\n", "<br/>")))
    details_html = "\n".join(details)

    rows = f"""          <tr>
            <td style="background-color: {c['secondary']}; padding: 30px 40px; text-align: center;">
              <img src="{LOGO_URL}" alt="{FIRM_NAME}" height="60" style="height: 60px; width: auto; max-width: 200px;" />
              <p style="color: {c['primary']}; font-size: 14px; margin: 10px 0 0 0; letter-spacing: 1px;">{_esc(labels.tagline)}</p>
            </td>
          </tr>
          <tr>
            <td style="padding: 40px;">
              <p style="color: {c['text']}; font-size: 16px; margin: 0 0 20px 0; line-height: 1.6;">
                {labels.greeting} <strong>{_esc(record.name)}</strong>,
              </p>
              <h1 style="color: {c['secondary']}; font-size: 22px; margin: 0 0 15px 0; font-weight: 600;">{labels.thank_you}</h1>
              <p style="color: {c['text_light']}; font-size: 15px; margin: 0 0 30px 0; line-height: 1.7;">{labels.received}</p>
              <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0" style="background-color: {c['background']}; border-radius: 6px; border-left: 4px solid {c['primary']};">
                <tr>
                  <td style="padding: 25px;">
                    <h2 style="color: {c['secondary']}; font-size: 14px; margin: 0 0 20px 0; font-weight: 600; letter-spacing: 0.5px;">{labels.request_details}</h2>
                    <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0">
{details_html}
                    </table>
                  </td>
                </tr>
              </table>
              <p style="color: {c['text_light']}; font-size: 14px; margin: 30px 0 0 0; line-height: 1.6;">{labels.questions}</p>
              <p style="color: {c['text']}; font-size: 15px; margin: 30px 0 0 0; line-height: 1.6;">
                {labels.regards},<br/>
                <strong style="color: {c['secondary']};">{labels.team}</strong>
              </p>
            </td>
          </tr>
          <tr>
            <td style="background-color: {c['secondary']}; padding: 25px 40px; text-align: center;">
              <p style="color: {c['primary']}; font-size: 16px; font-weight: 600; margin: 0 0 5px 0;">{FIRM_NAME}</p>
              <p style="color: {c['white']}; font-size: 13px; margin: 0; opacity: 0.9;">{labels.phone}: {FIRM_PHONE} | {FIRM_EMAIL}</p>
              <p style="color: {c['white']}; font-size: 12px; margin: 8px 0 0 0; opacity: 0.7;">{FIRM_ADDRESS}</p>
            </td>
          </tr>
          <tr>
            <td style="padding: 20px 30px; background-color: {c['background']};">
              <p style="color: {c['muted']}; font-size: 10px; margin: 0; line-height: 1.5; text-align: justify;">{labels.confidentiality}</p>
            </td>
          </tr>"""
    return _document(lang, labels.thank_you, rows)


def render_client_text(record: ContactRequest, formatted_date: str, formatted_time: str) -> str:
    """Alternativa en texto plano de la confirmación al cliente."""
    labels = CLIENT_LABELS.get(record.language, CLIENT_LABELS["es"])
    lines = [
        f"{labels.greeting} {record.name},",
        "",
        labels.thank_you,
        labels.received,
        "",
        labels.request_details,
        f"{labels.service}: {record.service}",
        f"{labels.preferred_date}: {formatted_date}",
        f"{labels.preferred_time}: {formatted_time}",
    ]
    if record.message:
        lines.append(f"{labels.message}: {record.message}")
    lines += ["", labels.questions, "", f"{labels.regards},", labels.team, "", labels.confidentiality]
    return "\n".join(lines)


# =================================================================================
# 🏢 Notificación al proveedor (siempre en español)
# =================================================================================
def _provider_field(label: str, value_html: str) -> str:
    c = COLORS
    return f"""                <tr>
                  <td style="padding: 12px 0; border-bottom: 1px solid {c['border']};">
                    <span style="color: {c['primary']}; font-size: 12px; font-weight: 600; text-transform: uppercase; display: block; margin-bottom: 4px;">{label}</span>
                    {value_html}
                  </td>
                </tr>"""


def _section_title(title: str) -> str:
    c = COLORS
    return (
        f'              <h2 style="color: {c["secondary"]}; font-size: 14px; margin: 0 0 15px 0; font-weight: 600; '
        f'text-transform: uppercase; letter-spacing: 1px; border-bottom: 2px solid {c["primary"]}; padding-bottom: 10px;">{title}</h2>'
    )


def render_provider_email(record: ContactRequest, formatted_date: str, formatted_time: str) -> str:
    """Documento HTML de aviso interno; contactos del cliente como enlaces clicables."""
    c = COLORS
    badge = LANGUAGE_BADGES.get(record.language, LANGUAGE_BADGES["es"])
    link_style = f"color: {c['secondary']}; font-size: 15px; text-decoration: none;"

    client_fields = "\n".join([
        _provider_field("NOMBRE", f'<span style="color: {c["text"]}; font-size: 16px; font-weight: 600;">{_esc(record.name)}</span>'),
        _provider_field("EMAIL", f'<a href="{_mailto(record.email)}" style="{link_style}">{_esc(record.email)}</a>'),
        _provider_field("TELÉFONO", f'<a href="{_tel(record.phone)}" style="{link_style}">{_esc(record.phone)}</a>'),
    ])

    appointment_fields = [
        _provider_field(
            "SERVICIO SOLICITADO",
            f'<span style="color: {c["text"]}; font-size: 15px; font-weight: 600;">{_esc(record.service)}</span>',
        ),
        _provider_field("FECHA PREFERIDA", f'<span style="color: {c["text"]}; font-size: 15px;">{_esc(formatted_date)}</span>'),
        _provider_field("HORA PREFERIDA", f'<span style="color: {c["text"]}; font-size: 15px;">{_esc(formatted_time)}</span>'),
    ]
    if record.message:
        message_html = _esc(record.message).replace("\n", "<br/>")
        appointment_fields.append(_provider_field(
            "MENSAJE DEL CLIENTE",
            f'<p style="color: {c["text"]}; font-size: 14px; margin: 0; line-height: 1.6; background-color: {c["background"]}; '
            f'padding: 12px; border-radius: 4px;">{message_html}</p>',
        ))
    appointment_html = "\n".join(appointment_fields)
    client_title = _section_title("INFORMACIÓN DEL CLIENTE")
    appointment_title = _section_title("DETALLES DE LA CITA")
    reply_href = _mailto(record.email, REPLY_SUBJECT)

    rows = f"""          <tr>
            <td style="background-color: {c['primary']}; padding: 25px 40px;">
              <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0">
                <tr>
                  <td>
                    <h1 style="color: {c['white']}; font-size: 20px; margin: 0; font-weight: 600;">Nueva Solicitud de Cita</h1>
                    <p style="color: {c['white']}; font-size: 13px; margin: 5px 0 0 0; opacity: 0.9;">Recibida desde apenyasociados.com</p>
                  </td>
                  <td align="right" style="vertical-align: middle;">
                    <span style="background-color: {c['white']}; color: {c['primary']}; font-size: 11px; font-weight: 600; padding: 5px 12px; border-radius: 20px; text-transform: uppercase;">{badge}</span>
                  </td>
                </tr>
              </table>
            </td>
          </tr>
          <tr>
            <td style="padding: 30px 40px 0 40px;">
{client_title}
              <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0">
{client_fields}
              </table>
            </td>
          </tr>
          <tr>
            <td style="padding: 30px 40px 0 40px;">
{appointment_title}
              <table role="presentation" width="100%" cellspacing="0" cellpadding="0" border="0">
{appointment_html}
              </table>
            </td>
          </tr>
          <tr>
            <td align="center" style="padding: 30px 40px;">
              <a href="{reply_href}" style="display: inline-block; background-color: {c['primary']}; color: {c['white']}; font-size: 14px; font-weight: 600; text-decoration: none; padding: 14px 30px; border-radius: 6px;">Responder al Cliente</a>
            </td>
          </tr>
          <tr>
            <td style="background-color: {c['secondary']}; padding: 20px 40px; text-align: center;">
              <p style="color: {c['primary']}; font-size: 14px; font-weight: 600; margin: 0;">{FIRM_NAME}</p>
              <p style="color: {c['white']}; font-size: 11px; margin: 8px 0 0 0; opacity: 0.7;">Este correo fue generado automáticamente desde el formulario de contacto</p>
            </td>
          </tr>
          <tr>
            <td style="padding: 15px 30px; background-color: {c['background']};">
              <p style="color: {c['muted']}; font-size: 10px; margin: 0; line-height: 1.5; text-align: center;">AVISO DE CONFIDENCIALIDAD: Este correo electrónico contiene información confidencial del cliente.</p>
            </td>
          </tr>"""
    return _document("es", "Nueva Solicitud de Cita", rows)


def render_provider_text(record: ContactRequest, formatted_date: str, formatted_time: str) -> str:
    badge = LANGUAGE_BADGES.get(record.language, LANGUAGE_BADGES["es"])
    lines = [
        f"Nueva Solicitud de Cita ({badge})",
        "",
        f"Nombre: {record.name}",
        f"Email: {record.email}",
        f"Teléfono: {record.phone}",
        f"Servicio solicitado: {record.service}",
        f"Fecha preferida: {formatted_date}",
        f"Hora preferida: {formatted_time}",
    ]
    if record.message:
        lines.append(f"Mensaje del cliente: {record.message}")
    return "\n".join(lines)
