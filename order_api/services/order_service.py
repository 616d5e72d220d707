# order_api/services/order_service.py
import math
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from order_api.data.models.order import OrderModel
from order_api.data.models.user import UserModel
from order_api.domain.authorization import Caller, Operation, authorize, list_owner_scope
from order_api.domain.errors import ForbiddenError, NotFoundError, ValidationError
from order_api.domain.fields import filter_privileged_fields, sanitize_payload
from order_api.domain.validation import validate_order_payload
from order_api.repos.order_repo import OrderRepo
from order_api.repos.user_repo import UserRepo
from order_api.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.

    Zapis: sanitize -> validate -> filter pól admina -> właściciel/autoryzacja -> repo.
    Odczyt: autoryzacja -> projekcja (pola admina usuwane dla zwykłych userów).
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.user_repo = UserRepo(db)

    # =====================================================
    # QUERY
    # =====================================================
    def list_orders(
        self,
        caller: Caller,
        status: Optional[str] = None,
        payment_status: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        """
        Use Case: lista zamówień. Admin widzi wszystkie, user tylko swoje
        (zawężone w zapytaniu, nie filtrowane po fakcie).
        """
        orders, total = self.repo.list_orders(
            owner_id=list_owner_scope(caller),
            status=status,
            payment_status=payment_status,
            offset=(page - 1) * limit,
            limit=limit,
        )

        return {
            "items": [self._project(o, caller) for o in orders],
            "totalCount": total,
            "page": page,
            "totalPages": math.ceil(total / limit),
        }

    def get_order(self, order_id: int, caller: Caller) -> Dict[str, Any]:
        order = self._load_authorized(order_id, caller, Operation.READ)
        return self._project(order, caller)

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_order(self, payload: Dict[str, Any], caller: Caller) -> Dict[str, Any]:
        """
        Use Case: nowe zamówienie. Właścicielem jest zawsze wywołujący,
        createdBy z payloadu jest ignorowane.
        """
        data = self._prepare(payload, caller, partial=False)

        order = self.repo.create_order(owner_id=caller.id, data=data)
        return self._project(order, caller)

    def update_order(
        self,
        order_id: int,
        payload: Dict[str, Any],
        caller: Caller,
        partial: bool = False,
    ) -> Dict[str, Any]:
        """
        Use Case: aktualizacja. Najpierw istnienie, potem prawa dostępu,
        dopiero potem walidacja i zapis.
        """
        order = self._load_authorized(order_id, caller, Operation.UPDATE)
        data = self._prepare(payload, caller, partial=partial)

        if not data:
            return self._project(order, caller)

        updated = self.repo.update_order(order, data)
        return self._project(updated, caller)

    def delete_order(self, order_id: int, caller: Caller) -> None:
        order = self._load_authorized(order_id, caller, Operation.DELETE)
        self.repo.delete_order(order)

    # =====================================================
    # HELPERS
    # =====================================================
    def _load_authorized(self, order_id: int, caller: Caller, operation: Operation) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found")

        decision = authorize(caller.id, caller.role, order.created_by, operation)
        if not decision.allowed:
            logger.warning(f"User {caller.id} denied {operation.value} on order {order_id}")
            raise ForbiddenError(decision.reason)

        return order

    def _prepare(self, payload: Dict[str, Any], caller: Caller, partial: bool) -> Dict[str, Any]:
        if isinstance(payload, dict):
            payload = sanitize_payload(dict(payload))

        data = validate_order_payload(payload, partial=partial)
        data = filter_privileged_fields(data, caller.role)
        data.pop("totalAmount", None)

        self._check_assignee(data)
        return data

    def _check_assignee(self, data: Dict[str, Any]) -> None:
        assignee_id = data.get("assignedTo")
        if assignee_id is not None and not self.user_repo.get_user(assignee_id):
            raise ValidationError([{"field": "assignedTo", "message": "Assigned user does not exist"}])

    @staticmethod
    def _user_summary(user: Optional[UserModel]) -> Optional[Dict[str, Any]]:
        if user is None:
            return None
        return {"id": user.id, "name": user.name, "email": user.email}

    def _project(self, order: OrderModel, caller: Caller) -> Dict[str, Any]:
        shipping = None
        if any(
            getattr(order, f"shipping_{p}") is not None
            for p in ("street", "city", "state", "zip_code", "country")
        ):
            shipping = {
                "street": order.shipping_street,
                "city": order.shipping_city,
                "state": order.shipping_state,
                "zipCode": order.shipping_zip_code,
                "country": order.shipping_country,
            }

        view = {
            "id": order.id,
            "orderNumber": order.order_number,
            "customerName": order.customer_name,
            "customerEmail": order.customer_email,
            "customerPhone": order.customer_phone,
            "items": [
                {
                    "productName": i.product_name,
                    "quantity": i.quantity,
                    "price": i.price,
                }
                for i in order.items
            ],
            "totalAmount": order.total_amount,
            "status": order.status,
            "paymentStatus": order.payment_status,
            "shippingAddress": shipping,
            "notes": order.notes,
            "createdBy": self._user_summary(order.creator),
            "assignedTo": self._user_summary(order.assignee),
            "adminNotes": order.admin_notes,
            "priority": order.priority,
            "tags": list(order.tags or []),
            "estimatedDeliveryDate": order.estimated_delivery_date,
            "createdAt": order.created_at,
            "updatedAt": order.updated_at,
        }

        return filter_privileged_fields(view, caller.role)
