from __future__ import annotations

import json
import time
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response

from raiku_api.core.config import Settings
from raiku_sim.canonical import TRACE_VERSION


def _tag_request_id(request: Request, response: Response) -> Response:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers["X-Request-Id"] = str(request_id)
    return response


def create_app(*, settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title="Raiku Battle API",
        version="0.1.0",
        openapi_url="/api/openapi.json",
        docs_url="/docs",
    )

    @app.middleware("http")
    async def _request_context(request: Request, call_next):
        start = time.perf_counter()
        request.state.request_id = (
            request.headers.get("x-request-id") or f"req_{uuid4().hex}"
        )
        response = _tag_request_id(request, await call_next(request))
        if settings.log_json:
            _log_json(
                {
                    "level": "info" if response.status_code < 400 else "warning",
                    "request_id": request.state.request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": round((time.perf_counter() - start) * 1000.0, 2),
                }
            )
        return response

    # Error responses built by handlers bypass the middleware's header write.
    @app.exception_handler(HTTPException)
    async def _http_error(request: Request, exc: HTTPException):
        return _tag_request_id(request, await http_exception_handler(request, exc))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return _tag_request_id(
            request, await request_validation_exception_handler(request, exc)
        )

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "trace_version": TRACE_VERSION}

    from raiku_api.routers import battles

    app.include_router(battles.router)

    return app


def _log_json(payload: dict[str, object]) -> None:
    print(json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


app = create_app()
