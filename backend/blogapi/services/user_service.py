"""User persistence: lookups, registration and status updates."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.passwords import hash_password_async, verify_password_async
from blogapi.db.models import User
from blogapi.errors import UserExists

logger = logging.getLogger("blogapi.users")


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    result = await db.execute(select(User).where(User.user_id == user_id))
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    *,
    email: str,
    name: str,
    password: str,
    rounds: int,
) -> User:
    user = User(
        email=normalize_email(email),
        name=name,
        password=await hash_password_async(password, rounds),
        post_ids=[],
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        # A concurrent registration claimed the email after the lookup.
        await db.rollback()
        logger.info("Duplicate registration for %s", normalize_email(email))
        raise UserExists() from exc
    await db.refresh(user)
    logger.info("Created user %s (%s)", user.user_id, user.email)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User | None:
    """Verify email + password. Returns User on success, None on failure."""
    user = await get_user_by_email(db, email)
    if user is None:
        return None
    if not await verify_password_async(password, user.password):
        return None
    return user


async def update_status(db: AsyncSession, user: User, status: str) -> User:
    user.status = status
    user.updated_at = datetime.now(timezone.utc)
    await db.flush()
    await db.refresh(user)
    return user


async def add_post_reference(db: AsyncSession, user: User, post_id: str) -> None:
    # JSON columns only track reassignment, never in-place mutation.
    user.post_ids = [*(user.post_ids or []), post_id]
    user.updated_at = datetime.now(timezone.utc)
    await db.flush()


async def remove_post_reference(db: AsyncSession, user: User, post_id: str) -> None:
    user.post_ids = [pid for pid in (user.post_ids or []) if pid != post_id]
    user.updated_at = datetime.now(timezone.utc)
    await db.flush()
