from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from api.common.pagination import clamp_page
from api.db.models import User
from api.modules.identity.repository import UserRepository
from league.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class IdentityService:
    def __init__(self, user_repository: UserRepository, *, max_strokes_given: int = 20) -> None:
        self.user_repository = user_repository
        self.max_strokes_given = max_strokes_given

    async def get_user(self, user_id: UUID) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    async def list_users(self, *, limit: int = 50, offset: int = 0) -> tuple[int, list[User]]:
        safe_limit, safe_offset = clamp_page(limit, offset)
        total = await self.user_repository.count_users()
        users = await self.user_repository.list_users(limit=safe_limit, offset=safe_offset)
        return total, users

    async def set_handicap(self, user_id: UUID, strokes_given: int) -> User:
        if strokes_given < 0 or strokes_given > self.max_strokes_given:
            raise ValidationError(
                f"strokes_given must be between 0 and {self.max_strokes_given}."
            )
        user = await self.get_user(user_id)
        previous = user.strokes_given
        user.strokes_given = strokes_given
        user.updated_at = datetime.now(timezone.utc).replace(tzinfo=None)
        saved = await self.user_repository.save(user)
        logger.info(
            "handicap_updated",
            extra={
                "user_id": str(user_id),
                "previous_strokes_given": previous,
                "strokes_given": strokes_given,
            },
        )
        return saved
