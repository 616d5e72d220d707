# order_api/services/auth_service.py
from sqlalchemy.orm import Session

from order_api.data.models.user import UserModel
from order_api.domain.errors import DuplicateKeyError, ForbiddenError, UnauthenticatedError
from order_api.domain.schemas import LoginIn, RegisterIn, TokenOut, UserOut
from order_api.repos.user_repo import UserRepo
from order_api.utils.logging import get_logger
from order_api.utils.security import create_token, decode_token, hash_password, verify_password

logger = get_logger(__name__)


class AuthService:
    """
    Rejestracja, logowanie i rozwiązywanie tożsamości z tokenu.
    """

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: RegisterIn) -> TokenOut:
        if self.repo.get_user_by_email(payload.email):
            raise DuplicateKeyError("User already exists with this email")

        # rola admin tylko przez seed, nie przez rejestrację
        user = self.repo.create_user(
            UserModel(
                name=payload.name,
                email=payload.email,
                password_hash=hash_password(payload.password),
                role="user",
            )
        )
        logger.info(f"Registered user {user.id} ({user.email})")
        return self._token_for(user)

    def login(self, payload: LoginIn, admin_only: bool = False) -> TokenOut:
        user = self.repo.get_user_by_email(payload.email)

        if not user or not verify_password(payload.password, user.password_hash):
            logger.info(f"Failed login for {payload.email}")
            raise UnauthenticatedError("Invalid credentials")

        if admin_only and not user.is_admin:
            raise ForbiddenError("Access denied. Admin privileges required.")

        return self._token_for(user)

    def resolve_user(self, token: str | None) -> UserModel:
        """
        Use Case: bearer token -> user z aktualną rolą (czytaną z bazy przy każdym requescie).
        """
        if not token:
            raise UnauthenticatedError("Not authorized to access this route")

        user_id = decode_token(token)
        if user_id is None:
            raise UnauthenticatedError("Invalid or expired token")

        user = self.repo.get_user(user_id)
        if not user:
            raise UnauthenticatedError("User no longer exists")

        return user

    @staticmethod
    def _token_for(user: UserModel) -> TokenOut:
        return TokenOut(token=create_token(user.id), user=UserOut.model_validate(user))
