# order_api/domain/validation.py
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from order_api.domain.errors import ValidationError
from order_api.domain.schemas import OrderCreateIn, OrderUpdateIn


def _collect_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    errors = []
    for err in exc.errors():
        #loc jest po aliasach: ('items', 0, 'quantity') -> 'items.0.quantity'
        field = ".".join(str(p) for p in err["loc"]) or "body"
        message = err["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": field, "message": message})
    return errors


def validate_order_payload(payload: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Waliduje payload zamówienia i zwraca znormalizowane dane (klucze camelCase),
    tylko z polami, które przysłał klient.

    Wszystkie błędy zbierane są naraz i zgłaszane jako jeden ValidationError.
    """
    if not isinstance(payload, dict):
        raise ValidationError([{"field": "body", "message": "Request body must be a JSON object"}])

    model = OrderUpdateIn if partial else OrderCreateIn

    try:
        validated = model.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(_collect_errors(e)) from e

    return validated.model_dump(by_alias=True, include=validated.model_fields_set)
