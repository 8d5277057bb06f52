# apen_contact/alerts.py  # Webhook opcional de alertas (Slack/Teams).

# =================================================================================
# 📢 Webhook de alertas (opcional)
# =================================================================================

import json
import os

import requests
from loguru import logger


def send_alert_webhook(title: str, message: str) -> bool:
    """Envía alerta a ALERT_WEBHOOK_URL si está definido; silencioso si no."""
    url = os.getenv("ALERT_WEBHOOK_URL")                                          # Lee la URL del webhook desde el entorno.
    if not url:                                                                   # Sin URL configurada...
        return False                                                              # ...no hace nada (opcionalidad real).
    try:
        payload = {"text": f"{title}\n{message}"}                                 # Payload simple compatible con Slack/Teams.
        headers = {"Content-Type": "application/json"}
        resp = requests.post(url, data=json.dumps(payload), headers=headers, timeout=5)
        resp.raise_for_status()
        return True
    except requests.RequestException as e:                                        # Una alerta caída nunca tumba la request.
        logger.error("No se pudo notificar alerta por webhook: {}", e)
        return False
