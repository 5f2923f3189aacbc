"""Business operations behind the ``/graphql`` endpoint.

Every resolver receives the operation's variables, the request's
:class:`AuthContext` and a database session, and follows the same order:

1. authentication (all operations except ``createUser`` and ``login``)
2. input validation, collecting every field error before failing
3. existence / ownership checks
4. persistence
5. response shaping (string ids, ISO-8601 timestamps)

Multi-step mutations (post insert + owner list append, post delete + image
removal + owner list pull) run sequentially inside the request's session.
The database writes commit together at the end of the request; the image
file removal is not part of that transaction and is not rolled back.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.deps import AuthContext
from blogapi.auth.tokens import issue_token
from blogapi.config import settings
from blogapi.db.models import User
from blogapi.errors import Forbidden, InvalidInput, NotFound, Unauthorized, UserExists, raise_if_invalid
from blogapi.schemas.operations import (
    IMAGE_UNCHANGED,
    AuthData,
    PostInput,
    PostOut,
    PostsPage,
    UserInput,
    UserOut,
)
from blogapi.services import post_service, user_service
from blogapi.services.image_store import ImageStore, get_image_store
from blogapi.validation import validate_post_fields, validate_user_input

logger = logging.getLogger("blogapi.resolvers")

Resolver = Callable[[dict[str, Any], AuthContext, AsyncSession], Awaitable[Any]]


# ── helpers ─────────────────────────────────────────────────────


def _require_auth(ctx: AuthContext) -> str:
    if not ctx.is_auth or not ctx.user_id:
        raise Unauthorized("not authenticated")
    return ctx.user_id


def _parse(model: type[BaseModel], raw: Any) -> Any:
    """Coerce a variables entry into *model*, reporting shape errors as field errors."""
    try:
        return model.model_validate(raw if raw is not None else {})
    except ValidationError as exc:
        errors = [
            {"message": f"invalid {'.'.join(str(p) for p in err['loc']) or 'input'}"}
            for err in exc.errors()
        ]
        raise InvalidInput(errors) from exc


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


async def _current_user(db: AsyncSession, user_id: str) -> User:
    user = await user_service.get_user_by_id(db, user_id)
    if user is None:
        raise Unauthorized("no user found")
    return user


async def _owned_post(db: AsyncSession, post_id: str, user_id: str):
    post = await post_service.get_post(db, post_id)
    if post is None:
        raise NotFound("no post found")
    if post.creator_id != user_id:
        logger.warning("User %s tried to modify post %s owned by %s", user_id, post_id, post.creator_id)
        raise Forbidden("not authorized")
    return post


# ── users ───────────────────────────────────────────────────────


async def create_user(args: dict[str, Any], ctx: AuthContext, db: AsyncSession) -> dict[str, Any]:
    user_input: UserInput = _parse(UserInput, args.get("userInput"))
    raise_if_invalid(validate_user_input(user_input.email, user_input.password))

    if await user_service.get_user_by_email(db, user_input.email) is not None:
        raise UserExists()

    created = await user_service.create_user(
        db,
        email=user_input.email,
        name=user_input.name,
        password=user_input.password,
        rounds=settings.BCRYPT_ROUNDS,
    )
    return UserOut.from_orm_dt(created).model_dump(by_alias=True)


async def login(args: dict[str, Any], ctx: AuthContext, db: AsyncSession) -> dict[str, Any]:
    email = _as_str(args.get("email"))
    password = _as_str(args.get("password"))

    account = await user_service.authenticate(db, email, password)
    if account is None:
        logger.info("Failed login attempt for %s", email)
        raise Unauthorized("invalid email or password")

    token = issue_token(
        account.user_id,
        account.email,
        settings.AUTH_SECRET_KEY,
        expire_minutes=settings.AUTH_TOKEN_EXPIRE_MINUTES,
    )
    logger.info("Login: %s (%s)", account.email, account.user_id)
    return AuthData(token=token, user_id=account.user_id).model_dump(by_alias=True)


async def user(args: dict[str, Any], ctx: AuthContext, db: AsyncSession) -> dict[str, Any]:
    user_id = _require_auth(ctx)
    current = await _current_user(db, user_id)
    return UserOut.from_orm_dt(current).model_dump(by_alias=True)


async def update_status(args: dict[str, Any], ctx: AuthContext, db: AsyncSession) -> dict[str, Any]:
    user_id = _require_auth(ctx)
    current = await _current_user(db, user_id)
    updated = await user_service.update_status(db, current, _as_str(args.get("status")))
    return UserOut.from_orm_dt(updated).model_dump(by_alias=True)


# ── posts ───────────────────────────────────────────────────────


async def create_post(args: dict[str, Any], ctx: AuthContext, db: AsyncSession) -> dict[str, Any]:
    user_id = _require_auth(ctx)
    post_input: PostInput = _parse(PostInput, args.get("postInput"))
    raise_if_invalid(validate_post_fields(post_input.title, post_input.content))

    creator = await user_service.get_user_by_id(db, user_id)
    if creator is None:
        raise Unauthorized("invalid user")

    created = await post_service.create_post(
        db,
        title=post_input.title,
        content=post_input.content,
        image_url=post_input.image_url,
        creator=creator,
    )
    await user_service.add_post_reference(db, creator, created.post_id)
    logger.info("User %s created post %s", user_id, created.post_id)
    return PostOut.from_orm_dt(created).model_dump(by_alias=True)


async def posts(args: dict[str, Any], ctx: AuthContext, db: AsyncSession) -> dict[str, Any]:
    _require_auth(ctx)
    try:
        page = int(args.get("page") or 1)
    except (TypeError, ValueError) as exc:
        raise InvalidInput([{"message": "invalid page"}]) from exc

    total = await post_service.count_posts(db)
    items = await post_service.list_posts(db, page=page, per_page=settings.POSTS_PER_PAGE)
    return PostsPage(
        posts=[PostOut.from_orm_dt(p) for p in items],
        total_posts=total,
    ).model_dump(by_alias=True)


async def post(args: dict[str, Any], ctx: AuthContext, db: AsyncSession) -> dict[str, Any]:
    _require_auth(ctx)
    found = await post_service.get_post(db, _as_str(args.get("id")))
    if found is None:
        raise NotFound("no post found")
    return PostOut.from_orm_dt(found).model_dump(by_alias=True)


async def update_post(args: dict[str, Any], ctx: AuthContext, db: AsyncSession) -> dict[str, Any]:
    user_id = _require_auth(ctx)
    existing = await _owned_post(db, _as_str(args.get("id")), user_id)

    post_input: PostInput = _parse(PostInput, args.get("postInput"))
    raise_if_invalid(validate_post_fields(post_input.title, post_input.content))

    replace_image = post_input.image_url is not None and post_input.image_url != IMAGE_UNCHANGED
    updated = await post_service.update_post(
        db,
        existing,
        title=post_input.title,
        content=post_input.content,
        image_url=post_input.image_url,
        replace_image=replace_image,
    )
    return PostOut.from_orm_dt(updated).model_dump(by_alias=True)


async def delete_post(
    args: dict[str, Any],
    ctx: AuthContext,
    db: AsyncSession,
    images: ImageStore | None = None,
) -> bool:
    user_id = _require_auth(ctx)
    post_id = _as_str(args.get("id"))
    existing = await _owned_post(db, post_id, user_id)

    (images or get_image_store()).clear(existing.image_url)
    await post_service.delete_post(db, existing)

    owner = await user_service.get_user_by_id(db, user_id)
    if owner is not None:
        await user_service.remove_post_reference(db, owner, post_id)
    logger.info("User %s deleted post %s", user_id, post_id)
    return True


RESOLVERS: dict[str, Resolver] = {
    "createUser": create_user,
    "login": login,
    "createPost": create_post,
    "posts": posts,
    "post": post,
    "updatePost": update_post,
    "deletePost": delete_post,
    "user": user,
    "updateStatus": update_status,
}
