"""User registration and caller resolution."""

import pytest

from sports_scheduler.core.domain_types import UserRole
from sports_scheduler.core.errors import ConflictError, NotFoundError, ValidationError
from sports_scheduler.services.user_service import UserService


async def test_register_normalizes_email(store):
    user = await UserService(store).register_user("  Sam@Example.COM ", " Sam Smith ")
    assert user.email == "sam@example.com"
    assert user.name == "Sam Smith"
    assert user.role == "player"


async def test_duplicate_email_conflicts(store):
    service = UserService(store)
    await service.register_user("dup@example.com", "First")
    with pytest.raises(ConflictError) as exc:
        await service.register_user("DUP@example.com", "Second")
    assert exc.value.code == "EMAIL_TAKEN"


async def test_short_name_rejected(store):
    with pytest.raises(ValidationError):
        await UserService(store).register_user("x@example.com", "X")


async def test_resolve_caller_reads_role_from_storage(store):
    service = UserService(store)
    user = await service.register_user("boss@example.com", "Boss", UserRole.ADMIN)
    caller = await service.resolve_caller(user.id)
    assert caller.id == user.id
    assert caller.is_admin


async def test_unknown_user(store):
    with pytest.raises(NotFoundError):
        await UserService(store).get_user(404)
