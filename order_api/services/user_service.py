# order_api/services/user_service.py
from typing import List

from sqlalchemy.orm import Session

from order_api.domain.authorization import Caller
from order_api.domain.errors import ForbiddenError
from order_api.domain.schemas import UserOut
from order_api.repos.user_repo import UserRepo


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def list_users(self, caller: Caller) -> List[UserOut]:
        if not caller.is_admin:
            raise ForbiddenError("User role 'user' is not authorized to access this route")
        return [UserOut.model_validate(u) for u in self.repo.list_users()]
