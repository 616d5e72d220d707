# order_api/domain/authorization.py
"""
Reguły dostępu do zamówień, niezależne od FastAPI.

Admin widzi i zmienia wszystko, zwykły user tylko swoje zamówienia.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from order_api.domain.fields import ADMIN_ROLE


class Operation(str, Enum):
    LIST = "list"
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


_VERBS = {
    Operation.READ: "access",
    Operation.UPDATE: "update",
    Operation.DELETE: "delete",
}


@dataclass(frozen=True)
class Caller:
    """Tożsamość z tokenu: id + rola."""

    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None


ALLOW = Decision(allowed=True)


def authorize(caller_id: int, caller_role: str, resource_owner_id: Optional[int], operation: Operation) -> Decision:
    # lista zawężana w zapytaniu (list_owner_scope), create zawsze dozwolony
    if operation in (Operation.LIST, Operation.CREATE):
        return ALLOW

    if caller_role == ADMIN_ROLE or caller_id == resource_owner_id:
        return ALLOW

    return Decision(allowed=False, reason=f"Not authorized to {_VERBS[operation]} this order")


def list_owner_scope(caller: Caller) -> Optional[int]:
    """None = bez filtra po właścicielu."""
    return None if caller.is_admin else caller.id
