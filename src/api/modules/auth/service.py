from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from api.config.settings import Settings
from api.db.models import User
from api.modules.auth.repository import AuthRepository
from api.modules.auth.schemas import (
    AuthLoginRequest,
    AuthRegisterRequest,
    AuthTokenResponse,
)
from api.modules.auth.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


class AuthService:
    def __init__(self, repository: AuthRepository, settings: Settings) -> None:
        self.repository = repository
        self.settings = settings
        self.jwt_kind_access = "access"
        self.bearer_type = "bearer"

    async def register(self, payload: AuthRegisterRequest) -> User:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        user = User(
            username=payload.username,
            email=payload.email,
            name=payload.name.strip() or payload.username,
            password_hash=hash_password(payload.password),
            strokes_given=0,
            is_active=True,
            is_admin=False,
            created_at=now,
            updated_at=now,
        )
        try:
            return await self.repository.create_user(user)
        except IntegrityError as exc:
            await self.repository.rollback()
            raise ValueError("Username or email already exists.") from exc

    async def login(self, payload: AuthLoginRequest) -> AuthTokenResponse:
        user = await self.repository.get_user_by_username_or_email(
            payload.username_or_email
        )
        if user is None or not verify_password(payload.password, user.password_hash):
            raise PermissionError("Invalid credentials.")
        if not user.is_active:
            raise PermissionError("User is inactive.")
        return self._issue_access_token(user.id)

    async def get_user_from_access_token(self, access_token: str) -> User:
        try:
            payload = decode_token(
                access_token,
                secret=self.settings.auth_jwt_secret,
                algorithm=self.settings.auth_jwt_algorithm,
            )
        except ValueError as exc:
            raise PermissionError(str(exc)) from exc
        kind = payload.get("type")
        if kind != self.jwt_kind_access:
            raise PermissionError("Invalid token type for access.")

        user_id_raw = payload.get("sub")
        if not isinstance(user_id_raw, str):
            raise PermissionError("Invalid token subject.")
        try:
            user_id = UUID(user_id_raw)
        except ValueError as exc:
            raise PermissionError("Invalid token subject.") from exc

        user = await self.repository.get_user_by_id(user_id)
        if user is None:
            raise PermissionError("User not found.")
        if not user.is_active:
            raise PermissionError("User is inactive.")
        return user

    def _issue_access_token(self, user_id: UUID) -> AuthTokenResponse:
        access = create_access_token(
            user_id=user_id,
            secret=self.settings.auth_jwt_secret,
            algorithm=self.settings.auth_jwt_algorithm,
            expires_minutes=self.settings.auth_access_token_ttl_minutes,
        )
        return AuthTokenResponse(
            access_token=access,
            token_type=self.bearer_type,
            expires_in=self.settings.auth_access_token_ttl_minutes * 60,
        )
