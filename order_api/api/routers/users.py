# order_api/api/routers/users.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from order_api.api.deps import get_caller
from order_api.data.database import get_db
from order_api.domain.authorization import Caller
from order_api.domain.errors import ForbiddenError
from order_api.domain.schemas import UserOut
from order_api.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=List[UserOut])
def list_users(caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    """Wszyscy użytkownicy (tylko admin)."""
    service = UserService(db)
    try:
        return service.list_users(caller)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
