"""User identities — registration and caller resolution.

Invariants:
    - Email is stored lower-cased and trimmed; one account per email
    - The caller's role always comes from storage, never from the request
"""

import logging

from sports_scheduler.core.domain_types import Caller, UserId, UserRole
from sports_scheduler.core.errors import (
    ConflictError, ErrorContext, NotFoundError, ValidationError,
)
from sports_scheduler.core.repository_protocols import SchedulerStore, UserLike

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100


class UserService:

    def __init__(self, store: SchedulerStore):
        self.store = store

    async def register_user(
        self, email: str, name: str, role: UserRole = UserRole.PLAYER,
    ) -> UserLike:
        email = (email or "").strip().lower()
        name = (name or "").strip()
        if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
            raise ValidationError(
                f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
                "name",
            )
        async with self.store.transaction() as tx:
            if await tx.users.get_by_email(email) is not None:
                raise ConflictError(
                    "EMAIL_TAKEN", "An account with this email already exists",
                )
            user = await tx.users.add(email, name, UserRole(role).value)
        logger.info(f"User {user.id} registered as {user.role}", extra={"user_id": user.id})
        return user

    async def get_user(self, user_id: UserId) -> UserLike:
        user = await self.store.users.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id, ErrorContext(user_id=user_id))
        return user

    async def resolve_caller(self, user_id: UserId) -> Caller:
        user = await self.get_user(user_id)
        return Caller(id=user.id, role=UserRole(user.role))
