"""Request ID and security headers middleware on a minimal app."""

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from app.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from app.middleware.request_id import resolve_request_id
from app.shared.telemetry.logging import request_id_var


@pytest.fixture
async def mini_client() -> AsyncClient:
    mini = FastAPI()

    @mini.get("/echo")
    async def echo(request: Request) -> dict[str, str]:
        return {"state": request.state.request_id, "context": request_id_var.get()}

    mini.add_middleware(SecurityHeadersMiddleware)
    mini.add_middleware(RequestIDMiddleware)
    async with AsyncClient(transport=ASGITransport(app=mini), base_url="http://test") as ac:
        yield ac


def test_resolve_request_id_rejects_unsafe_values() -> None:
    assert resolve_request_id("abc-123_X") == "abc-123_X"
    generated = resolve_request_id("bad value\nwith newline")
    assert len(generated) == 32
    assert resolve_request_id("x" * 65) != "x" * 65
    assert resolve_request_id(None) != resolve_request_id(None)


async def test_request_id_is_forwarded_and_exposed(mini_client) -> None:
    response = await mini_client.get("/echo", headers={"X-Request-ID": "req-42"})

    assert response.headers["x-request-id"] == "req-42"
    assert response.json() == {"state": "req-42", "context": "req-42"}
    assert request_id_var.get() == "-"


async def test_request_id_is_generated_when_missing(mini_client) -> None:
    response = await mini_client.get("/echo")
    assert response.headers["x-request-id"] == response.json()["state"]


async def test_security_headers_are_added(mini_client) -> None:
    response = await mini_client.get("/echo")
    assert response.headers["cache-control"] == "no-store"
    assert response.headers["x-frame-options"] == "DENY"
    assert "default-src 'none'" in response.headers["content-security-policy"]


async def test_docs_are_served_without_strict_csp(mini_client) -> None:
    response = await mini_client.get("/docs")
    assert response.status_code == 200
    assert "content-security-policy" not in response.headers
    assert response.headers["x-content-type-options"] == "nosniff"
