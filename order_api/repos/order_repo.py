# order_api/repos/order_repo.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic.alias_generators import to_camel, to_snake
from sqlalchemy import func, select
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from order_api.data.models.order import OrderModel
from order_api.data.models.order_item import OrderItemModel
from order_api.domain.errors import DuplicateKeyError, ValidationError
from order_api.domain.schemas import MAX_ID
from order_api.utils.logging import get_logger

logger = get_logger(__name__)

_SHIPPING_COLUMNS = ("street", "city", "state", "zip_code", "country")

# pola z payloadu, które nigdy nie trafiają wprost do bazy
_IGNORED_FIELDS = {"total_amount", "created_by", "id", "created_at", "updated_at"}

CENT = Decimal("0.01")


def compute_total(items: Iterable[OrderItemModel]) -> Decimal:
    return sum((Decimal(i.quantity) * Decimal(i.price) for i in items), Decimal("0.00")).quantize(CENT)


class OrderRepo:
    """
    Zapis agregatu zamówienia (zamówienie + pozycje + adres) jako jednej całości.

    total_amount jest przeliczany z pozycji przy każdej zmianie items,
    w tym samym commicie co zapis.
    """

    def __init__(self, db: Session):
        self.db = db

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(self, order_id: int) -> OrderModel | None:
        # id spoza zakresu kolumny Integer nie może istnieć
        if not 1 <= order_id <= MAX_ID:
            return None
        return self.db.get(OrderModel, order_id)

    def list_orders(
        self,
        owner_id: Optional[int] = None,
        status: Optional[str] = None,
        payment_status: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[OrderModel], int]:
        conditions = []
        if owner_id is not None:
            conditions.append(OrderModel.created_by == owner_id)
        if status:
            conditions.append(OrderModel.status == status)
        if payment_status:
            conditions.append(OrderModel.payment_status == payment_status)

        total = self.db.execute(
            select(func.count()).select_from(OrderModel).where(*conditions)
        ).scalar_one()

        orders = self.db.execute(
            select(OrderModel)
            .where(*conditions)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .offset(offset)
            .limit(limit)
        ).scalars().all()

        return list(orders), total

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_order(self, owner_id: int, data: Dict[str, Any]) -> OrderModel:
        order = OrderModel(created_by=owner_id, total_amount=Decimal("0.00"), tags=[])
        self._apply(order, data)
        self.db.add(order)
        self._commit()
        self.db.refresh(order)
        logger.info(f"Order {order.id} ({order.order_number}) created by user {owner_id}, total {order.total_amount}")
        return order

    def update_order(self, order: OrderModel, data: Dict[str, Any]) -> OrderModel:
        self._apply(order, data)
        order.updated_at = datetime.now(timezone.utc)
        self._commit()
        self.db.refresh(order)
        logger.info(f"Order {order.id} updated, fields: {sorted(data)}")
        return order

    def delete_order(self, order: OrderModel) -> None:
        self.db.delete(order)
        self.db.commit()
        logger.info(f"Order {order.id} deleted")

    # =====================================================
    # HELPERS
    # =====================================================
    def _apply(self, order: OrderModel, data: Dict[str, Any]) -> None:
        for key, value in data.items():
            column = to_snake(key)

            if column in _IGNORED_FIELDS:
                continue
            if column == "items":
                self._replace_items(order, value)
            elif column == "shipping_address":
                self._set_shipping_address(order, value)
            elif hasattr(OrderModel, column):
                setattr(order, column, value)

    def _replace_items(self, order: OrderModel, items: List[Dict[str, Any]]) -> None:
        # cena zaokrąglana do groszy przed zapisem, żeby total == suma zapisanych pozycji
        order.items = [
            OrderItemModel(
                position=position,
                product_name=item["productName"],
                quantity=item["quantity"],
                price=Decimal(item["price"]).quantize(CENT),
            )
            for position, item in enumerate(items)
        ]
        # total zawsze z pozycji, wartość od klienta jest ignorowana
        order.total_amount = compute_total(order.items)

    @staticmethod
    def _set_shipping_address(order: OrderModel, address: Optional[Dict[str, Any]]) -> None:
        address = address or {}
        for part in _SHIPPING_COLUMNS:
            setattr(order, f"shipping_{part}", address.get(to_camel(part)))

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if "order_number" in str(e.orig):
                raise DuplicateKeyError("Order number already exists") from e
            raise
        except DataError as e:
            self.db.rollback()
            logger.warning(f"Order rejected by database: {e.orig}")
            raise ValidationError([{"field": "body", "message": "Value does not fit the order record"}]) from e
