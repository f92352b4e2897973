"""Interceptor chain wrapped around every product route handler.

An interceptor takes a handler and returns a new handler. ``InterceptedRoute``
applies ``DEFAULT_INTERCEPTORS`` innermost-first, so the logger runs inside the
error translator and failures raised anywhere below it become JSON error bodies.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import ClassVar

from fastapi import Request, Response
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.routing import APIRoute
from loguru import logger
from starlette.responses import JSONResponse
from starlette.types import Receive, Scope, Send

from src.product_api.api.utils.paths import get_service_name
from src.product_api.core.exceptions import DecodeError

Handler = Callable[[Request], Awaitable[Response]]
Interceptor = Callable[[Handler], Handler]

ERROR_STATUS_CODE = 400


def describe_validation_error(exc: RequestValidationError) -> str:
    """Flatten FastAPI's validation error list into one readable line."""
    details = []
    for error in exc.errors():
        location = ".".join(
            str(part)
            for part in error.get("loc", ())
            if part != "body" and not isinstance(part, int)
        )
        message = error.get("msg", "invalid value")
        details.append(f"{location}: {message}" if location else message)
    return "could not decode request body: " + ("; ".join(details) or "invalid body")


def error_message(exc: Exception) -> str:
    """Message reported to the client for ``exc``."""
    if isinstance(exc, RequestValidationError):
        return str(DecodeError(describe_validation_error(exc)))
    if isinstance(exc, HTTPException):
        return str(exc.detail)
    return str(exc) or type(exc).__name__


def intercept_logger(handler: Handler) -> Handler:
    """Log the invoked service before delegating."""

    async def wrapper(request: Request) -> Response:
        service_name = get_service_name(request.url.path)
        logger.bind(service_name=service_name).info("service call: {}", service_name)
        return await handler(request)

    return wrapper


class ErrorResponse(JSONResponse):
    """JSON error body that logs when it cannot be delivered to the client."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except Exception:
            logger.exception("couldn't write error response")
            raise


def intercept_error(handler: Handler) -> Handler:
    """Turn any failure of ``handler`` into ``{"error": ...}`` with status 400."""

    async def wrapper(request: Request) -> Response:
        try:
            return await handler(request)
        except Exception as exc:
            message = error_message(exc)
            logger.opt(exception=exc).error(
                "{} {} failed: {}", request.method, request.url.path, message
            )
            return ErrorResponse(
                status_code=ERROR_STATUS_CODE, content={"error": message}
            )

    return wrapper


DEFAULT_INTERCEPTORS: tuple[Interceptor, ...] = (intercept_logger, intercept_error)


def chain(handler: Handler, interceptors: Sequence[Interceptor]) -> Handler:
    """Wrap ``handler`` with ``interceptors``; the first one ends up innermost."""
    for interceptor in interceptors:
        handler = interceptor(handler)
    return handler


class InterceptedRoute(APIRoute):
    """APIRoute whose handler runs through the interceptor chain."""

    interceptors: ClassVar[Sequence[Interceptor]] = DEFAULT_INTERCEPTORS

    def get_route_handler(self) -> Handler:
        return chain(super().get_route_handler(), self.interceptors)
