"""Translate domain exceptions into HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers as register_protean_exception_handlers

from marketplace.coupon.errors import CouponCodeConflictError, CouponNotAppliedError, CouponPersistenceError

logger = structlog.get_logger(__name__)


def _messages(exc):
    """Error body as a ``{field: [message]}`` dict.

    Only ``ValidationError`` exposes ``messages``; not-found and invalid-operation
    errors keep the dict they were raised with in ``args``.
    """
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]

    if isinstance(messages, dict):
        return messages
    return {"error": [str(messages if messages is not None else exc)]}


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"errors": _messages(exc)})


async def conflict_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=409, content={"errors": _messages(exc)})


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"errors": _messages(exc)})


async def persistence_handler(request: Request, exc: CouponPersistenceError) -> JSONResponse:
    logger.error("Request failed in persistence layer", path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={"errors": {"server": ["An internal server error occurred. Please try again later"]}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Protean's default mapping, with the marketplace's error body and coupon-specific statuses on top."""
    register_protean_exception_handlers(app)

    # Starlette resolves handlers through the exception's MRO, so subclasses win
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(CouponCodeConflictError, conflict_handler)
    app.add_exception_handler(CouponNotAppliedError, conflict_handler)
    app.add_exception_handler(ValidationError, validation_handler)
    app.add_exception_handler(CouponPersistenceError, persistence_handler)
