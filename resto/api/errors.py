# resto/api/errors.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from resto.domain.errors import InternalError, InvalidPayload, OrderingError
from resto.utils.logging import get_logger

logger = get_logger(__name__)


def error_response(exc: OrderingError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder({"error": exc.message, **exc.extra}),
    )


async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"[{request.method} {request.url.path}] {type(exc).__name__}: {exc.message}")
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return error_response(InvalidPayload(issues=issues))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[{request.method} {request.url.path}] Unhandled error: {exc}")
    return error_response(InternalError())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderingError, ordering_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
