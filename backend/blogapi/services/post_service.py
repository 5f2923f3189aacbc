"""Post CRUD service."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.db.models import Post, User


async def count_posts(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Post))
    return int(result.scalar_one())


async def list_posts(db: AsyncSession, *, page: int, per_page: int) -> list[Post]:
    """Return one page of posts, newest first."""
    page = max(page, 1)
    result = await db.execute(
        select(Post)
        .order_by(Post.created_at.desc(), Post.post_id.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
    )
    return list(result.scalars().all())


async def get_post(db: AsyncSession, post_id: str) -> Post | None:
    result = await db.execute(select(Post).where(Post.post_id == post_id))
    return result.scalar_one_or_none()


async def create_post(
    db: AsyncSession,
    *,
    title: str,
    content: str,
    image_url: str | None,
    creator: User,
) -> Post:
    post = Post(title=title, content=content, image_url=image_url, creator_id=creator.user_id)
    post.creator = creator
    db.add(post)
    await db.flush()
    return post


async def update_post(
    db: AsyncSession,
    post: Post,
    *,
    title: str,
    content: str,
    image_url: str | None = None,
    replace_image: bool = False,
) -> Post:
    post.title = title
    post.content = content
    if replace_image:
        post.image_url = image_url
    post.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return post


async def delete_post(db: AsyncSession, post: Post) -> None:
    await db.delete(post)
    await db.flush()
