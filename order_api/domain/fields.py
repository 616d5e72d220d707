# order_api/domain/fields.py
"""
Klasyfikacja pól zamówienia i filtrowanie payloadów.

PRIVILEGED_FIELDS to jedyne źródło prawdy o polach tylko dla admina,
używane przy zapisie (create, update) i przy projekcji odpowiedzi.
"""
from typing import Any, Dict

ADMIN_ROLE = "admin"

# nazwy pól w formacie JSON (camelCase)
PRIVILEGED_FIELDS = frozenset({
    "assignedTo",
    "adminNotes",
    "priority",
    "tags",
    "estimatedDeliveryDate",
    "dueDate",
})


def sanitize_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Trim na wszystkich tekstowych wartościach najwyższego poziomu."""
    for key, value in payload.items():
        if isinstance(value, str):
            payload[key] = value.strip()
    return payload


def filter_privileged_fields(payload: Dict[str, Any], role: str) -> Dict[str, Any]:
    if role == ADMIN_ROLE:
        return payload
    return {k: v for k, v in payload.items() if k not in PRIVILEGED_FIELDS}
