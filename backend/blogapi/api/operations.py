"""Operation endpoint: one route, dispatched by operation name.

POST /graphql
    Body ``{"operation": "<name>", "variables": {...}}``.
    Success → ``200 {"data": {"<name>": <result>}}``.
    Failure → ``<status> {"errors": [{"message", "status", "data"?}]}``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.api.resolvers import RESOLVERS
from blogapi.auth.deps import AuthContext, get_auth_context
from blogapi.db.engine import get_db
from blogapi.errors import UnknownOperation, render_error
from blogapi.schemas.operations import OperationRequest

logger = logging.getLogger("blogapi.api.operations")
OPERATION_PATH = "/graphql"

router = APIRouter(tags=["operations"])


@router.post(OPERATION_PATH)
async def run_operation(
    body: OperationRequest,
    ctx: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    try:
        resolver = RESOLVERS.get(body.operation)
        if resolver is None:
            raise UnknownOperation(f"unknown operation '{body.operation}'")
        result = await resolver(body.variables, ctx, db)
    except Exception as exc:
        # Nothing a failed operation wrote may reach the commit in get_db.
        await db.rollback()
        payload = render_error(exc)
        logger.debug("Operation %s failed: %s", body.operation, payload)
        return JSONResponse(status_code=payload["status"], content={"errors": [payload]})

    return JSONResponse(content={"data": {body.operation: result}})
