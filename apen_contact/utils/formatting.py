# apen_contact/utils/formatting.py  # Formateo de fecha y hora para los correos del formulario.

# =================================================================================
# 🗓️ Fechas y horas legibles (sin depender del locale del sistema)
# ---------------------------------------------------------------------------------
# - format_date: '2026-01-15' → '15 de enero, 2026' (es) / 'January 15, 2026' (en).
# - format_time: '15:30' → '03:30 PM'.
# Ambas funciones nunca lanzan: ante entrada inválida devuelven el texto original.
# =================================================================================

from __future__ import annotations                                               # Anotaciones pospuestas (str | None).

from datetime import date                                                        # Fecha de calendario sin zona horaria.

_MONTHS_ES = ["enero", "febrero", "marzo", "abril", "mayo", "junio", "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"]  # Meses ES.
_MONTHS_EN = ["January", "February", "March", "April", "May", "June", "July", "August", "September", "October", "November", "December"]  # Meses EN.


def _parse_calendar_date(date_string: str) -> date:
    """Convierte 'YYYY-MM-DD' en date; lanza ValueError si el formato no cuadra."""
    parts = date_string.strip().split("-")                                       # Separa año, mes y día.
    if len(parts) != 3 or not all(p.isdigit() for p in parts):                   # Exige tres bloques numéricos.
        raise ValueError(f"Fecha inválida: {date_string!r}")
    year, month, day = (int(p) for p in parts)                                   # Convierte a enteros.
    return date(year, month, day)                                                # date() valida rangos (mes 13, día 31...).


def format_date(date_string: str, language: str) -> str:
    """Devuelve la fecha en texto legible según idioma; si no parsea, la deja igual."""
    try:
        parsed = _parse_calendar_date(date_string)                               # Medianoche local implícita: no hay zona.
    except (ValueError, TypeError, AttributeError, OverflowError):               # OverflowError: año de 20 dígitos.
        return date_string                                                       # Fallback silencioso.

    if language == "es":                                                         # Caso español...
        return f"{parsed.day} de {_MONTHS_ES[parsed.month - 1]}, {parsed.year}"  # '15 de enero, 2026'.
    return f"{_MONTHS_EN[parsed.month - 1]} {parsed.day}, {parsed.year}"         # 'January 15, 2026'.


def format_time(time_string: str) -> str:
    """Convierte 'HH:MM' o 'HH:MM:SS' (24h) a 'hh:MM AM/PM'; si no parsea, la deja igual."""
    try:
        parts = time_string.strip().split(":")
        if len(parts) < 2:                                                       # Hace falta al menos hora y minutos.
            return time_string
        hours_raw, minutes_raw = parts[:2]                                       # Segundos (si vienen) se ignoran.
        if not (hours_raw.isdigit() and minutes_raw.isdigit()):                  # Solo dígitos (rechaza '-1', ' 5').
            return time_string
        hours, minutes = int(hours_raw), int(minutes_raw)
    except (ValueError, TypeError, AttributeError):
        return time_string

    if hours > 23 or minutes > 59:                                               # Fuera de reloj de 24h.
        return time_string

    period = "PM" if hours >= 12 else "AM"                                       # Sufijo AM/PM.
    display_hours = hours % 12 or 12                                             # 0 y 12 → 12.
    return f"{display_hours:02d}:{minutes:02d} {period}"                         # Relleno a dos dígitos.
