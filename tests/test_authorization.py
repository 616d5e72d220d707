import pytest

from order_api.domain.authorization import Caller, Operation, authorize, list_owner_scope


@pytest.mark.parametrize("operation", [Operation.READ, Operation.UPDATE, Operation.DELETE])
def test_owner_allowed(operation):
    assert authorize(1, "user", 1, operation).allowed


@pytest.mark.parametrize("operation", [Operation.READ, Operation.UPDATE, Operation.DELETE])
def test_admin_allowed_on_foreign_resource(operation):
    assert authorize(1, "admin", 2, operation).allowed


@pytest.mark.parametrize(
    "operation, reason",
    [
        (Operation.READ, "Not authorized to access this order"),
        (Operation.UPDATE, "Not authorized to update this order"),
        (Operation.DELETE, "Not authorized to delete this order"),
    ],
)
def test_non_owner_denied(operation, reason):
    decision = authorize(1, "user", 2, operation)

    assert not decision.allowed
    assert decision.reason == reason


def test_create_always_allowed():
    assert authorize(5, "user", None, Operation.CREATE).allowed


def test_list_always_allowed():
    assert authorize(5, "user", None, Operation.LIST).allowed


def test_list_scope():
    assert list_owner_scope(Caller(id=3, role="admin")) is None
    assert list_owner_scope(Caller(id=3, role="user")) == 3
