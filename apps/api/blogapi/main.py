"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from blogapi.core.logging_safety import safe_log_identifier
from blogapi.errors import ApiError
from blogapi.repositories.memory import InMemoryStore
from blogapi.routes import auth_router, blogs_router
from blogapi.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

_OPENAPI_RESPONSE_CODES: dict[str, dict[str, set[str]]] = {
    "/api/v1/auth/signup": {"post": {"201", "400", "409"}},
    "/api/v1/auth/login": {"post": {"200", "400", "401"}},
    "/api/v1/auth/me": {"get": {"200", "401"}},
    "/api/v1/blogs": {"get": {"200", "500"}, "post": {"201", "400", "401"}},
    "/api/v1/blogs/{blogId}": {
        "get": {"200", "404"},
        "put": {"200", "400", "401", "403", "404"},
        "patch": {"200", "400", "401", "403", "404"},
        "delete": {"200", "401", "403", "404"},
    },
}

_BEARER_SECURITY_SCHEME = {
    "type": "http",
    "scheme": "bearer",
    "bearerFormat": "JWT",
}


def _apply_contract_response_codes(schema: dict) -> None:
    """Limit documented response codes to the HTTP contract."""
    for path, methods in _OPENAPI_RESPONSE_CODES.items():
        path_item = schema.get("paths", {}).get(path)
        if not path_item:
            continue

        for method, allowed_codes in methods.items():
            operation = path_item.get(method)
            if not operation:
                continue

            responses = operation.setdefault("responses", {})
            for status_code in list(responses.keys()):
                if status_code not in allowed_codes:
                    responses.pop(status_code, None)

            for status_code in sorted(allowed_codes):
                responses.setdefault(status_code, {"description": "See API contract"})


def _apply_bearer_security_scheme(schema: dict) -> None:
    """Document the raw Authorization header as an HTTP bearer scheme."""
    schemes = schema.get("components", {}).get("securitySchemes", {})
    if "bearerAuth" in schemes:
        schemes["bearerAuth"] = dict(_BEARER_SECURITY_SCHEME)


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
            "type": str(error.get("type", "")),
        }
        for error in exc.errors()
    ]


def create_app(store: InMemoryStore | None = None) -> FastAPI:
    app = FastAPI(title="Blog API", version="1.0.0")
    app.state.store = store if store is not None else InMemoryStore()

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_, exc: RequestValidationError) -> JSONResponse:
        payload = ErrorResponse(
            code="VALIDATION_ERROR",
            message="Invalid request payload",
            details={"errors": _validation_errors(exc)},
        )
        return JSONResponse(status_code=400, content=payload.model_dump(mode="json"))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        correlation_id = request.headers.get("X-Correlation-Id")
        logger.exception(
            "request.failed correlation_id=%s method=%s path=%s error=%s",
            safe_log_identifier(correlation_id, prefix="cid"),
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        payload = ErrorResponse(code="INTERNAL_ERROR", message="Internal server error")
        return JSONResponse(status_code=500, content=payload.model_dump(mode="json", exclude_none=True))

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(blogs_router, prefix=API_PREFIX)

    def custom_openapi() -> dict:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        _apply_contract_response_codes(schema)
        _apply_bearer_security_scheme(schema)
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app


app = create_app()
