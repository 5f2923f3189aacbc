"""Tests for user persistence against the per-test SQLite database."""

from __future__ import annotations

import pytest

from blogapi.errors import UserExists
from blogapi.services import user_service


@pytest.mark.asyncio
class TestCreateUser:
    async def test_unique_email_violation_becomes_user_exists(self, db):
        first = await user_service.create_user(
            db, email="dup@blog.io", name="First", password="secret123", rounds=4
        )
        first_id = first.user_id
        await db.commit()

        # Bypasses the lookup the resolver does, as a concurrent request would.
        with pytest.raises(UserExists):
            await user_service.create_user(
                db, email="DUP@blog.io", name="Second", password="secret123", rounds=4
            )

        stored = await user_service.get_user_by_email(db, "dup@blog.io")
        assert stored is not None
        assert stored.user_id == first_id
        assert stored.name == "First"

    async def test_new_user_defaults(self, db):
        created = await user_service.create_user(
            db, email=" New@Blog.io ", name="New", password="secret123", rounds=4
        )
        assert created.email == "new@blog.io"
        assert created.status == "I am new!"
        assert created.post_ids == []
        assert await user_service.authenticate(db, "new@blog.io", "secret123") is created
