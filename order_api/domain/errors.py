# order_api/domain/errors.py
from typing import List, Dict


class OrderAPIError(Exception):
    """Bazowy wyjątek domeny, każdy błąd dotyczy tylko jednego requestu."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OrderAPIError):
    """Jedno lub więcej naruszeń na poziomie pól, zawsze zwracane razem."""

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]


class NotFoundError(OrderAPIError):
    pass


class ForbiddenError(OrderAPIError):
    pass


class DuplicateKeyError(OrderAPIError):
    pass


class UnauthenticatedError(OrderAPIError):
    pass


class RateLimitExceededError(OrderAPIError):
    pass
