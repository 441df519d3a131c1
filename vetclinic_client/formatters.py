"""Display formatting for the pt-BR locale.

Every formatter renders a missing value as ``-`` (``truncate`` and
``get_initials`` render an empty string instead).
"""

from __future__ import annotations

from datetime import date, datetime
import re
from typing import Any
from urllib.parse import quote

EMPTY = "-"

CURRENCY_SYMBOLS = {"BRL": "R$", "USD": "US$", "EUR": "€"}

_NON_DIGITS = re.compile(r"\D")


def _to_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(value: Any, fmt: str = "%d/%m/%Y") -> str:
    parsed = _to_datetime(value)
    if parsed is None:
        return EMPTY
    return parsed.strftime(fmt)


def format_datetime(value: Any) -> str:
    return format_date(value, "%d/%m/%Y %H:%M")


def format_time(value: Any) -> str:
    return format_date(value, "%H:%M")


def format_relative_date(value: Any, today: date | None = None) -> str:
    parsed = _to_datetime(value)
    if parsed is None:
        return EMPTY

    today = today or date.today()
    diff_days = (parsed.date() - today).days

    if diff_days == 0:
        return "Hoje"
    if diff_days == 1:
        return "Amanhã"
    if diff_days == -1:
        return "Ontem"
    if 0 < diff_days <= 7:
        return f"Em {diff_days} dias"
    if -7 <= diff_days < 0:
        return f"Há {abs(diff_days)} dias"
    return format_date(parsed)


def format_number(value: Any, decimals: int = 0) -> str:
    if value is None or value == "":
        return EMPTY
    rendered = f"{float(value):,.{decimals}f}"
    # 1,234.5 -> 1.234,5
    return rendered.replace(",", "\x00").replace(".", ",").replace("\x00", ".")


def format_currency(value: Any, currency: str = "BRL") -> str:
    if value is None or value == "":
        return EMPTY
    amount = float(value)
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    rendered = f"{symbol} {format_number(abs(amount), 2)}"
    return f"-{rendered}" if amount < 0 else rendered


def format_percent(value: Any, decimals: int = 1) -> str:
    if value is None or value == "":
        return EMPTY
    return f"{format_number(value, decimals)}%"


def format_phone(phone: str | None) -> str:
    if not phone:
        return EMPTY
    digits = _NON_DIGITS.sub("", phone)
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return phone


def format_document(document: str | None) -> str:
    """Render a CPF (11 digits) or CNPJ (14 digits); anything else as given."""
    if not document:
        return EMPTY
    digits = _NON_DIGITS.sub("", document)
    if len(digits) == 11:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
    if len(digits) == 14:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
    return document


def format_weight(weight: Any, unit: str = "kg") -> str:
    if weight is None or weight == "":
        return EMPTY
    return f"{format_number(weight, 1)} {unit}"


def format_area(area: Any) -> str:
    if area is None or area == "":
        return EMPTY
    return f"{format_number(area, 2)} ha"


def get_whatsapp_link(phone: str | None, message: str = "") -> str | None:
    if not phone:
        return None
    digits = _NON_DIGITS.sub("", phone)
    number = digits if digits.startswith("55") else f"55{digits}"
    if message:
        return f"https://wa.me/{number}?text={quote(message, safe='')}"
    return f"https://wa.me/{number}"


def truncate(text: str | None, length: int = 50) -> str:
    if not text:
        return ""
    if len(text) <= length:
        return text
    return f"{text[:length]}..."


def get_initials(name: str | None) -> str:
    if not name or not name.strip():
        return ""
    parts = name.split()
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()
