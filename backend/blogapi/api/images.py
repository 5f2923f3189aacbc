"""Image upload side channel.

PUT /post-image
    Multipart form with an ``image`` file and an optional ``oldPath`` field.
    Only png/jpg/jpeg files are stored; anything else counts as no file.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from blogapi.auth.deps import AuthContext, get_auth_context
from blogapi.errors import InternalError
from blogapi.services.image_store import ImageStore, get_image_store

logger = logging.getLogger("blogapi.api.images")
router = APIRouter(tags=["images"])


@router.put("/post-image")
async def upload_post_image(
    image: UploadFile | None = File(default=None),
    old_path: str | None = Form(default=None, alias="oldPath"),
    ctx: AuthContext = Depends(get_auth_context),
    images: ImageStore = Depends(get_image_store),
) -> JSONResponse:
    if not ctx.is_auth:
        # Reported as a plain server failure, not as a 401.
        raise InternalError("not authenticated")

    if image is None or not image.filename or not images.accepts(image.content_type):
        return JSONResponse(status_code=200, content={"message": "no file"})

    if old_path:
        images.clear(old_path)

    file_path = images.save(await image.read(), image.content_type or "")
    return JSONResponse(status_code=201, content={"message": "file stored", "filePath": file_path})
