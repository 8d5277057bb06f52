# smoke_test.py  # Script de verificación rápida (smoke test) contra un backend en marcha.

import os                               # Para leer variables de entorno (URL base).
import sys
from typing import Any, Dict, Optional  # Tipado opcional para claridad.

import requests                         # Cliente HTTP para llamar a la API.

# -------------------------------
# ⚙️ Configuración (por entorno)
# -------------------------------
BASE_URL = os.getenv("SMOKE_BASE_URL", "http://127.0.0.1:8000").rstrip("/")  # URL base del backend (sin barra final).
SEND_REAL = os.getenv("SMOKE_SEND", "0") == "1"                              # Si True, también prueba un envío válido.
SMOKE_EMAIL = os.getenv("SMOKE_EMAIL", "smoke@example.com")                  # Destinatario de la confirmación.

JSON_HEADERS = {"Content-Type": "application/json"}

VALID_PAYLOAD: Dict[str, Any] = {
    "name": "Smoke Test",
    "email": SMOKE_EMAIL,
    "phone": "555-0000",
    "service": "Auditoría",
    "date": "2026-03-10",
    "time": "14:00",
    "message": "Prueba automática",
    "language": "es",
}


def post(path: str, payload: Dict[str, Any]) -> requests.Response:
    return requests.post(f"{BASE_URL}{path}", headers=JSON_HEADERS, json=payload, timeout=60)


def pretty(ok: bool) -> str:
    return "✅" if ok else "❌"


def check(label: str, ok: bool, detail: Optional[str] = None) -> bool:
    print(f"{pretty(ok)} {label}" + (f" → {detail}" if detail else ""))
    return ok


def main() -> int:
    results = []

    r = requests.get(f"{BASE_URL}/api/health", timeout=10)
    results.append(check("GET /api/health", r.status_code == 200, str(r.status_code)))

    r = requests.get(f"{BASE_URL}/api/meta/options", timeout=10)
    results.append(check("GET /api/meta/options", r.status_code == 200 and "services" in r.json()))

    r = post("/api/contact", {**VALID_PAYLOAD, "email": "not-an-email"})
    results.append(check("POST /api/contact email inválido → 400", r.status_code == 400, r.text))

    r = post("/api/contact", {**VALID_PAYLOAD, "phone": ""})
    results.append(check("POST /api/contact campo vacío → 400", r.status_code == 400, r.text))

    if SEND_REAL:                                                             # Envía correos (reales o DRY_RUN según el backend).
        r = post("/api/contact", VALID_PAYLOAD)
        results.append(check("POST /api/contact válido → 200", r.status_code == 200, r.text))

    print(f"\n{sum(results)}/{len(results)} comprobaciones OK")
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
