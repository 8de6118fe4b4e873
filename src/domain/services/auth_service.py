"""Account service: registration, login and account removal."""

from typing import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.validation import require_fields
from infrastructure.auth.passwords import DUMMY_HASH, hash_password, verify_password
from infrastructure.auth.provider import IAuthProvider

logger = structlog.get_logger()


class AuthService:
    """Service layer for user accounts and token issuance."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth = auth_provider

    async def register(self, name: str, email: str, password: str) -> str:
        """Create a user and return a token for it."""
        require_fields(
            {"name": name, "email": email, "password": password},
            {
                "name": "Name is required",
                "email": "Please include a valid email",
                "password": "Please enter a password with 6 or more characters",
            },
        )
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise EmailAlreadyRegisteredError(email.strip().lower())

            user = User(
                name=name.strip(),
                email=email,
                password_hash=hash_password(password),
            )
            created = await uow.users.create(user)
            await uow.commit()

        logger.info("user_registered", user_id=str(created.id))
        return self._auth.create_token(created.id)

    async def login(self, email: str, password: str) -> str:
        """Check credentials and return a fresh token.

        Unknown email and wrong password produce the same error.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if user is None:
            verify_password(password, DUMMY_HASH)
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        return self._auth.create_token(user.id)

    async def get_current_account(self, user_id: UUID) -> User:
        """Load the account a verified token refers to."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    async def delete_account(self, user_id: UUID) -> None:
        """Delete a user together with their profile and posts."""
        async with self._uow_factory() as uow:
            await uow.profiles.delete_by_user(user_id)
            removed_posts = await uow.posts.delete_by_user(user_id)
            deleted = await uow.users.delete(user_id)
            if not deleted:
                raise UserNotFoundError(str(user_id))
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id), posts_removed=removed_posts)
