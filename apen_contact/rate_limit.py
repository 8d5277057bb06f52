# apen_contact/rate_limit.py                                                                                   # Ruta del archivo.

# =================================================================================
# 🚦 Rate limit ligero en memoria
# ---------------------------------------------------------------------------------
# - Ventana deslizante en memoria por clave (IP + ruta).
# - Útil para un solo proceso (uvicorn simple); con varias instancias usa el proxy.
# =================================================================================

import os
import threading
import time
from collections import deque
from typing import Deque, Dict, Tuple

from loguru import logger

# Estructura en memoria: clave → deque de timestamps (segundos)
_BUCKETS: Dict[str, Deque[float]] = {}
_LOCK = threading.Lock()                               # Las rutas sync corren en el threadpool de Starlette.
_SWEEP_AT = 1024                                       # Nº de claves a partir del cual se barren cubos caducados.


def _now() -> float:
    return time.time()


def is_allowed(key: str, max_req: int, window_s: int) -> bool:
    """Devuelve True si la acción está permitida para 'key' según (max_req/window_s)."""
    if max_req <= 0:                                    # Límite 0 o negativo → sin rate limit.
        return True

    with _LOCK:
        now = _now()
        cutoff = now - window_s                         # Purga timestamps fuera de [now - window_s, now].

        bucket = _BUCKETS.get(key)
        if bucket is not None:
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()
            if not bucket:                              # Cubo vacío: la clave sale del dict.
                del _BUCKETS[key]
                bucket = None

        if bucket is not None and len(bucket) >= max_req:
            logger.warning("Rate limit hit for key='{}' ({}/{} in {}s)", key, len(bucket), max_req, window_s)
            return False

        if len(_BUCKETS) >= _SWEEP_AT:                  # Muchas IPs distintas: barre las que ya caducaron.
            _sweep(cutoff)
        _BUCKETS.setdefault(key, deque()).append(now)
        return True


def _sweep(cutoff: float) -> None:
    stale = [k for k, b in _BUCKETS.items() if not b or b[-1] <= cutoff]
    for k in stale:
        del _BUCKETS[k]


def reset() -> None:
    """Vacía todos los cubos (tests y recargas)."""
    with _LOCK:
        _BUCKETS.clear()


def get_limits_from_env(prefix: str, default_max: int, default_window: int) -> Tuple[int, int]:
    """Lee {prefix}_MAX y {prefix}_WINDOW (segundos) desde env; defaults si faltan o son inválidos."""
    try:
        max_req = int(os.getenv(f"{prefix}_MAX", str(default_max)))
        window = int(os.getenv(f"{prefix}_WINDOW", str(default_window)))
    except ValueError:
        max_req, window = default_max, default_window
    return max_req, window
