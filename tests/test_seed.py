from order_api.data.seed import seed_admin
from order_api.repos.user_repo import UserRepo
from order_api.utils.security import verify_password


def test_creates_admin(db):
    user = seed_admin(db, email="root@shop.io", password="rootpass", name="Root")

    assert user.role == "admin"
    assert verify_password("rootpass", user.password_hash)


def test_promotes_existing_user(db, alice):
    seed_admin(db, email="alice@shop.io", password="newpass1", name="Alice Admin")

    user = UserRepo(db).get_user(alice.id)
    assert user.role == "admin"
    assert user.name == "Alice Admin"
    assert verify_password("newpass1", user.password_hash)


def test_is_idempotent(db):
    seed_admin(db, email="root@shop.io", password="rootpass")
    seed_admin(db, email="root@shop.io", password="rootpass")

    assert len(UserRepo(db).list_users()) == 1
