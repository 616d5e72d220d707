# order_api/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from order_api.api.deps import get_current_user
from order_api.data.database import get_db
from order_api.data.models.user import UserModel
from order_api.domain.errors import DuplicateKeyError, ForbiddenError, UnauthenticatedError
from order_api.domain.schemas import LoginIn, RegisterIn, TokenOut, UserOut
from order_api.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    service = AuthService(db)
    try:
        return service.register(payload)
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))


def _login(payload: LoginIn, db: Session, admin_only: bool):
    service = AuthService(db)
    try:
        return service.login(payload, admin_only=admin_only)
    except UnauthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    return _login(payload, db, admin_only=False)


@router.post("/admin/login", response_model=TokenOut)
def admin_login(payload: LoginIn, db: Session = Depends(get_db)):
    """Logowanie do panelu admina - odrzuca zwykłych userów."""
    return _login(payload, db, admin_only=True)


@router.get("/me", response_model=UserOut)
def me(user: UserModel = Depends(get_current_user)):
    return user
