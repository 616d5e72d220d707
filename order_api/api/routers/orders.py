# order_api/api/routers/orders.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from order_api.api.deps import get_caller
from order_api.data.database import get_db
from order_api.domain.authorization import Caller
from order_api.domain.errors import DuplicateKeyError, ForbiddenError, NotFoundError, ValidationError
from order_api.domain.schemas import MessageOut, OrderOut, OrderPage, OrderStatus, PaymentStatus
from order_api.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


def _validation_failed(e: ValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail={"message": e.message, "errors": e.errors})


@router.get("/", response_model=OrderPage, response_model_exclude_unset=True)
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    payment_status: Optional[PaymentStatus] = Query(None, alias="paymentStatus"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    Lista zamówień. Admin widzi wszystkie, user tylko swoje.
    """
    svc = get_service(db)
    return svc.list_orders(caller, status=status, payment_status=payment_status, page=page, limit=limit)


@router.get("/{order_id}", response_model=OrderOut, response_model_exclude_unset=True)
def get_order(
    order_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_order(order_id, caller)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post("/", response_model=OrderOut, response_model_exclude_unset=True, status_code=201)
def create_order(
    payload: Dict[str, Any] = Body(...),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    Tworzy zamówienie. totalAmount liczony z pozycji,
    pola admina usuwane dla zwykłych userów.
    """
    svc = get_service(db)
    try:
        return svc.create_order(payload, caller)
    except ValidationError as e:
        raise _validation_failed(e)
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))


def _update(order_id: int, payload: Dict[str, Any], caller: Caller, db: Session, partial: bool):
    svc = get_service(db)
    try:
        return svc.update_order(order_id, payload, caller, partial=partial)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValidationError as e:
        raise _validation_failed(e)
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{order_id}", response_model=OrderOut, response_model_exclude_unset=True)
def update_order(
    order_id: int,
    payload: Dict[str, Any] = Body(...),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    Pełna aktualizacja (wymagane pola jak przy tworzeniu).
    """
    return _update(order_id, payload, caller, db, partial=False)


@router.patch("/{order_id}", response_model=OrderOut, response_model_exclude_unset=True)
def patch_order(
    order_id: int,
    payload: Dict[str, Any] = Body(...),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return _update(order_id, payload, caller, db, partial=True)


@router.delete("/{order_id}", response_model=MessageOut)
def delete_order(
    order_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.delete_order(order_id, caller)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return MessageOut(message="Order deleted successfully")
