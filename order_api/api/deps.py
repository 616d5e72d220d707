# order_api/api/deps.py
from functools import lru_cache

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from order_api.data.database import get_db
from order_api.data.models.user import UserModel
from order_api.domain.authorization import Caller
from order_api.domain.errors import UnauthenticatedError
from order_api.services.auth_service import AuthService
from order_api.services.rate_limit_service import RateLimitService
from order_api.utils.settings import RATE_LIMIT_ENABLED

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> UserModel:
    token = credentials.credentials if credentials else None
    try:
        return AuthService(db).resolve_user(token)
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_caller(user: UserModel = Depends(get_current_user)) -> Caller:
    return Caller(id=user.id, role=user.role)


@lru_cache
def get_rate_limiter() -> RateLimitService | None:
    if not RATE_LIMIT_ENABLED:
        return None
    return RateLimitService()


def enforce_rate_limit(
    request: Request,
    limiter: RateLimitService | None = Depends(get_rate_limiter),
):
    if limiter is None:
        return

    client_ip = request.client.host if request.client else "unknown"
    if not limiter.allow(client_ip):
        raise HTTPException(
            status_code=429,
            detail="Too many requests from this IP, please try again later.",
        )
