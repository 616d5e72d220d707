# order_api/data/seed.py
"""
Tworzy domyślnego admina albo nadaje admina istniejącemu userowi.

    python -m order_api.data.seed
"""
from sqlalchemy.orm import Session

from order_api.data.database import SessionLocal, init_db
from order_api.data.models.user import UserModel
from order_api.repos.user_repo import UserRepo
from order_api.utils.logging import get_logger
from order_api.utils.security import hash_password
from order_api.utils.settings import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD

logger = get_logger(__name__)


def seed_admin(
    db: Session,
    email: str = ADMIN_EMAIL,
    password: str = ADMIN_PASSWORD,
    name: str = ADMIN_NAME,
) -> UserModel:
    repo = UserRepo(db)
    existing = repo.get_user_by_email(email)

    if existing:
        was_admin = existing.is_admin
        existing.role = "admin"
        existing.name = name
        existing.password_hash = hash_password(password)
        user = repo.save(existing)
        logger.info("Admin password reset" if was_admin else f"Existing user {email} promoted to admin")
        return user

    user = repo.create_user(
        UserModel(
            name=name,
            email=email.lower(),
            password_hash=hash_password(password),
            role="admin",
        )
    )
    logger.info(f"Admin user {email} created")
    return user


def seed():
    init_db()
    db = SessionLocal()
    try:
        seed_admin(db)
        logger.warning("Change the default admin password after first login")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
