import pytest

from app.core.errors import DependencyError, NotFoundError, ValidationError
from app.services.user_status_service import (
    DEFAULT_SUBSCRIPTION_STATUS,
    UserStatusService,
    resolve_subscription_status,
)
from tests.conftest import FakeStore


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"subscriptionStatus": "Pro"}, "Pro"),
        ({"subscriptionStatus": "Premium", "other": 1}, "Premium"),
        ({}, "Free"),
        ({"subscriptionStatus": None}, "Free"),
        ({"subscriptionStatus": ""}, "Free"),
        ({"subscriptionStatus": 0}, "Free"),
        ({"subscriptionStatus": False}, "Free"),
        ({"subscriptionStatus": 2}, 2),
        ({"subscriptionStatus": ["Pro"]}, ["Pro"]),
    ],
)
def test_resolve_subscription_status(data, expected):
    assert resolve_subscription_status(data) == expected


def test_default_is_free():
    assert DEFAULT_SUBSCRIPTION_STATUS == "Free"


@pytest.mark.asyncio
async def test_returns_stored_status():
    store = FakeStore(documents={"u1": {"subscriptionStatus": "Pro"}})
    service = UserStatusService(store)

    assert await service.get_subscription_status("u1") == "Pro"
    assert store.calls == ["u1"]


@pytest.mark.asyncio
@pytest.mark.parametrize("uid", [None, ""])
async def test_empty_uid_never_reaches_store(uid):
    store = FakeStore()
    service = UserStatusService(store)

    with pytest.raises(ValidationError) as exc_info:
        await service.get_subscription_status(uid)

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "User ID (uid) is required."
    assert store.calls == []


@pytest.mark.asyncio
async def test_missing_document_is_not_found():
    service = UserStatusService(FakeStore())

    with pytest.raises(NotFoundError) as exc_info:
        await service.get_subscription_status("ghost")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_store_failure_becomes_dependency_error():
    cause = PermissionError("Missing or insufficient permissions.")
    service = UserStatusService(FakeStore(error=cause))

    with pytest.raises(DependencyError) as exc_info:
        await service.get_subscription_status("u1")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Internal Server Error"
    assert "permissions" not in str(exc_info.value)
    assert exc_info.value.__cause__ is cause


@pytest.mark.asyncio
async def test_every_call_reads_the_store():
    store = FakeStore(documents={"u1": {}})
    service = UserStatusService(store)

    results = [await service.get_subscription_status("u1") for _ in range(3)]

    assert results == ["Free", "Free", "Free"]
    assert store.calls == ["u1", "u1", "u1"]
