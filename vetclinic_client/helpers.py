from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping
from urllib.parse import quote

from vetclinic_client.enums import STATUS_COLORS, STATUS_LABELS

GENERIC_ERROR_MESSAGE = "Ocorreu um erro inesperado"


def build_query_string(params: Mapping[str, Any] | None) -> str:
    """Render ``params`` as ``?k=v&...``, skipping None and empty-string values."""
    if not params:
        return ""

    parts = []
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        parts.append(f"{quote(str(key), safe='')}={quote(str(value), safe='')}")

    if not parts:
        return ""
    return "?" + "&".join(parts)


def get_error_message(error: BaseException | None) -> str:
    payload = getattr(error, "payload", None)
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()

        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            texts = []
            for item in errors:
                if isinstance(item, dict):
                    text = item.get("msg") or item.get("message")
                    if text:
                        texts.append(str(text))
                elif item:
                    texts.append(str(item))
            if texts:
                return ", ".join(texts)

    field_errors = getattr(error, "errors", None)
    if isinstance(field_errors, dict) and field_errors:
        return ", ".join(f"{field}: {message}" for field, message in field_errors.items())

    if error is not None and str(error).strip():
        return str(error).strip()
    return GENERIC_ERROR_MESSAGE


def get_pagination_info(pagination: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if not pagination:
        return None

    page = int(pagination.get("page") or 1)
    limit = int(pagination.get("limit") or 0)
    total = int(pagination.get("total") or 0)
    total_pages = int(pagination.get("totalPages") or 0)

    return {
        "start": (page - 1) * limit + 1 if total else 0,
        "end": min(page * limit, total),
        "total": total,
        "current_page": page,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


def get_status_color(status: str | None) -> str:
    return STATUS_COLORS.get(status or "", "secondary")


def get_status_label(status: str | None) -> str:
    if not status:
        return "-"
    return STATUS_LABELS.get(status, status)


def group_by(items: Iterable[Mapping[str, Any]], key: str | Callable[[Any], Any]) -> dict[Any, list]:
    grouped: dict[Any, list] = {}
    for item in items:
        group_key = key(item) if callable(key) else item.get(key)
        grouped.setdefault(group_key, []).append(item)
    return grouped


def sort_by(
    items: Iterable[Mapping[str, Any]],
    key: str | Callable[[Any], Any],
    order: str = "asc",
) -> list:
    """Sort records by a field or key function; records without a value go last in either order."""
    def value_of(item):
        return key(item) if callable(key) else item.get(key)

    items = list(items)
    present = [item for item in items if value_of(item) is not None]
    missing = [item for item in items if value_of(item) is None]
    return sorted(present, key=value_of, reverse=order == "desc") + missing


def is_empty(value: Mapping[str, Any] | None) -> bool:
    return not value
