"""Map storefront domain errors onto HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.domain import logger
from storefront.errors import (
    InsufficientStock,
    InvalidTransition,
    NoEffectiveChange,
    OrderNotFound,
    ProductNotFound,
    SizeNotFound,
    StorefrontError,
    TransactionConflict,
    UserNotFound,
)

STATUS_CODES = {
    ProductNotFound: 404,
    OrderNotFound: 404,
    UserNotFound: 404,
    SizeNotFound: 409,
    InsufficientStock: 409,
    NoEffectiveChange: 409,
    TransactionConflict: 409,
    InvalidTransition: 422,
}


def status_code_for(exc: StorefrontError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_CODES:
            return STATUS_CODES[error_type]
    return 400


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.info(
        "Request refused",
        path=request.url.path,
        kind=exc.kind,
        status_code=status_code,
        **exc.context,
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "message": exc.message,
            "kind": exc.kind,
            "errors": exc.messages,
            "retryable": exc.retryable,
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
