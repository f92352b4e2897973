"""Tests for the interceptor chain wrapped around product routes."""

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient
from loguru import logger
from pydantic import BaseModel
from starlette.responses import JSONResponse

from src.product_api.api.http.middleware.interceptors import (
    DEFAULT_INTERCEPTORS,
    ERROR_STATUS_CODE,
    ErrorResponse,
    InterceptedRoute,
    chain,
    describe_validation_error,
    error_message,
    intercept_error,
    intercept_logger,
)
from src.product_api.core.exceptions import IdParseError


@pytest.fixture
def log_messages():
    messages: list[str] = []
    sink_id = logger.add(lambda message: messages.append(message.record["message"]))
    try:
        yield messages
    finally:
        logger.remove(sink_id)


class TestChain:
    @pytest.mark.asyncio
    async def test_first_interceptor_runs_innermost(self, request_factory):
        calls: list[str] = []

        def tracing(name):
            def interceptor(handler):
                async def wrapper(request):
                    calls.append(f"{name}:before")
                    response = await handler(request)
                    calls.append(f"{name}:after")
                    return response

                return wrapper

            return interceptor

        async def handler(request):
            calls.append("handler")
            return JSONResponse({})

        wrapped = chain(handler, [tracing("inner"), tracing("outer")])
        await wrapped(request_factory("/getProducts"))

        assert calls == [
            "outer:before",
            "inner:before",
            "handler",
            "inner:after",
            "outer:after",
        ]

    def test_default_order(self):
        assert DEFAULT_INTERCEPTORS == (intercept_logger, intercept_error)


class TestInterceptLogger:
    @pytest.mark.asyncio
    async def test_logs_service_name(self, request_factory, log_messages):
        async def handler(request):
            return JSONResponse({"ok": True})

        response = await intercept_logger(handler)(request_factory("/getProduct/3"))

        assert response.status_code == 200
        assert "service call: getProduct" in log_messages

    @pytest.mark.asyncio
    async def test_unknown_service(self, request_factory, log_messages):
        async def handler(request):
            return JSONResponse({})

        await intercept_logger(handler)(request_factory("/"))

        assert "service call: Unknown" in log_messages


class TestInterceptError:
    @pytest.mark.asyncio
    async def test_passes_successful_response_through(self, request_factory):
        expected = JSONResponse({"ok": True})

        async def handler(request):
            return expected

        assert await intercept_error(handler)(request_factory()) is expected

    @pytest.mark.asyncio
    async def test_exception_becomes_error_body(self, request_factory, log_messages):
        async def handler(request):
            raise IdParseError("numeric id is expected. Given: abc")

        response = await intercept_error(handler)(request_factory("/getProduct/abc"))

        assert response.status_code == ERROR_STATUS_CODE == 400
        assert response.body == b'{"error":"numeric id is expected. Given: abc"}'
        assert any("numeric id is expected" in message for message in log_messages)

    @pytest.mark.asyncio
    async def test_failed_write_is_logged(self, request_factory, log_messages):
        async def handler(request):
            raise RuntimeError("boom")

        async def receive():
            return {"type": "http.request", "body": b"", "more_body": False}

        async def broken_send(message):
            raise RuntimeError("connection reset by peer")

        request = request_factory()
        response = await intercept_error(handler)(request)

        assert isinstance(response, ErrorResponse)
        with pytest.raises(RuntimeError, match="connection reset"):
            await response(request.scope, receive, broken_send)
        assert "couldn't write error response" in log_messages


class TestErrorMessage:
    def test_validation_error_is_reported_as_decode_error(self):
        exc = RequestValidationError(
            [{"loc": ("body", "name"), "msg": "Field required", "type": "missing"}]
        )

        assert error_message(exc) == "could not decode request body: name: Field required"

    def test_json_decode_error_has_no_location(self):
        exc = RequestValidationError(
            [{"loc": ("body", 7), "msg": "JSON decode error", "type": "json_invalid"}]
        )

        assert describe_validation_error(exc) == (
            "could not decode request body: JSON decode error"
        )

    def test_plain_exception_uses_its_text_or_type(self):
        assert error_message(ValueError("bad")) == "bad"
        assert error_message(RuntimeError()) == "RuntimeError"


class Payload(BaseModel):
    name: str


class TestInterceptedRoute:
    """Routes built with InterceptedRoute answer every failure with 400."""

    @pytest.fixture
    def client(self):
        router = APIRouter(route_class=InterceptedRoute)

        @router.get("/explode")
        def explode():
            raise RuntimeError("boom")

        @router.post("/echo")
        def echo(payload: Payload):
            return payload

        app = FastAPI()
        app.include_router(router)
        return TestClient(app)

    def test_unexpected_exception(self, client):
        response = client.get("/explode")

        assert response.status_code == 400
        assert response.json() == {"error": "boom"}

    def test_invalid_body(self, client):
        response = client.post("/echo", json={"other": 1})

        assert response.status_code == 400
        assert response.json() == {
            "error": "could not decode request body: name: Field required"
        }

    def test_valid_body(self, client):
        response = client.post("/echo", json={"name": "ok"})

        assert response.status_code == 200
        assert response.json() == {"name": "ok"}
