"""Pydantic models for the operation endpoint."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Sent by clients in place of ``imageUrl`` when the image should stay as is.
IMAGE_UNCHANGED = "undefined"


def iso_utc(value: datetime) -> str:
    """Render *value* as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    # SQLite hands back naive datetimes; they are stored as UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Requests ────────────────────────────────────────────────────


class OperationRequest(BaseModel):
    operation: str
    variables: dict[str, Any] = Field(default_factory=dict)


class UserInput(_CamelModel):
    email: str = ""
    name: str = ""
    password: str = ""


class PostInput(_CamelModel):
    title: str = ""
    content: str = ""
    image_url: str | None = None


# ── Responses ───────────────────────────────────────────────────


class CreatorOut(_CamelModel):
    id: str = Field(alias="_id")
    name: str


class PostOut(_CamelModel):
    id: str = Field(alias="_id")
    title: str
    content: str
    image_url: str | None = None
    creator: CreatorOut
    created_at: str
    updated_at: str

    @classmethod
    def from_orm_dt(cls, obj: object) -> "PostOut":
        from blogapi.db.models import Post
        p: Post = obj  # type: ignore[assignment]
        return cls(
            id=p.post_id,
            title=p.title,
            content=p.content,
            image_url=p.image_url,
            creator=CreatorOut(id=p.creator.user_id, name=p.creator.name),
            created_at=iso_utc(p.created_at),
            updated_at=iso_utc(p.updated_at),
        )


class PostsPage(_CamelModel):
    posts: list[PostOut]
    total_posts: int


class UserOut(_CamelModel):
    id: str = Field(alias="_id")
    email: str
    name: str
    status: str
    posts: list[str] = Field(default_factory=list)

    @classmethod
    def from_orm_dt(cls, obj: object) -> "UserOut":
        from blogapi.db.models import User
        u: User = obj  # type: ignore[assignment]
        return cls(
            id=u.user_id,
            email=u.email,
            name=u.name,
            status=u.status,
            posts=list(u.post_ids or []),
        )


class AuthData(_CamelModel):
    token: str
    user_id: str
