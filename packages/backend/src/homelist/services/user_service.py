"""User service — registration, login, and profile management.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the database.

bcrypt is deliberately slow, so every hash/verify goes through
asyncio.to_thread: a login in progress doesn't stall other requests.
Each write is one commit; a unique-constraint race on email surfaces as
the same ConflictError the up-front check would have raised.
"""

import asyncio
import uuid
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from homelist.auth.jwt import TokenService
from homelist.auth.password import PasswordHasher
from homelist.db.models import User
from homelist.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid email or password"
EMAIL_TAKEN = "Email is already in use"


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class UserService:
    """Business logic for accounts."""

    def __init__(
        self,
        db: AsyncSession,
        hasher: PasswordHasher,
        tokens: TokenService,
        password_min_length: int = 6,
    ):
        self.db = db
        self.hasher = hasher
        self.tokens = tokens
        self.password_min_length = password_min_length

    # ─── Registration / login ───────────────────────────

    async def register(
        self,
        *,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        phone: Optional[str] = None,
    ) -> tuple[User, str]:
        """Create an account and return it with a fresh token."""
        if _blank(name) or _blank(email) or not password:
            raise ValidationError("Name, email, and password are required")
        self._check_password_rules(password)

        if await self._find_by_email(email):
            raise ConflictError(EMAIL_TAKEN)

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        user = User(
            name=name.strip(),
            email=email,
            phone=phone or None,
            password_hash=password_hash,
        )
        self.db.add(user)
        await self._commit_unique_email()

        logger.info("user.registered", user_id=str(user.id))
        return user, self.tokens.issue(user.id)

    async def authenticate(
        self, *, email: Optional[str], password: Optional[str]
    ) -> tuple[User, str]:
        """Check credentials and return the user with a fresh token.

        Learn: Unknown email and wrong password produce the same error
        after the same amount of bcrypt work.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self._find_by_email(email)
        if user is None:
            await asyncio.to_thread(self.hasher.verify, password, self.hasher.dummy_hash)
            logger.info("auth.login_failed", reason="unknown_email")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not await asyncio.to_thread(self.hasher.verify, password, user.password_hash):
            logger.info("auth.login_failed", reason="bad_password", user_id=str(user.id))
            raise AuthenticationError(INVALID_CREDENTIALS)

        return user, self.tokens.issue(user.id)

    # ─── Profile ────────────────────────────────────────

    async def get_profile(self, user_id: uuid.UUID) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(
        self,
        user_id: uuid.UUID,
        *,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None,
        current_password: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> User:
        """Replace name/email/phone and optionally rotate the password.

        Learn: Unlike listings, the profile form always sends the whole
        record: name and email are required, and a missing phone clears it.
        A new password needs the current one. Tokens already issued stay
        valid after a password change (there is no revocation list).
        """
        if _blank(name) or _blank(email):
            raise ValidationError("Name and email are required")

        user = await self.get_profile(user_id)

        if email != user.email and await self._find_by_email(email):
            raise ConflictError(EMAIL_TAKEN)

        password_hash = None
        if new_password:
            if not current_password:
                raise ValidationError(
                    "Current password is required to set a new password"
                )
            if not await asyncio.to_thread(
                self.hasher.verify, current_password, user.password_hash
            ):
                raise ValidationError("Current password is incorrect")
            self._check_password_rules(new_password)
            password_hash = await asyncio.to_thread(self.hasher.hash, new_password)

        user.name = name.strip()
        user.email = email
        user.phone = phone or None
        if password_hash is not None:
            user.password_hash = password_hash
        await self._commit_unique_email()

        logger.info(
            "user.profile_updated",
            user_id=str(user.id),
            password_changed=password_hash is not None,
        )
        return user

    # ─── Helpers ────────────────────────────────────────

    def _check_password_rules(self, password: str) -> None:
        if len(password) < self.password_min_length:
            raise ValidationError(
                f"Password must be at least {self.password_min_length} characters long"
            )

    async def _find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def _commit_unique_email(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(EMAIL_TAKEN)
