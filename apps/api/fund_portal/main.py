"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fund_portal.core.config import Settings, get_settings
from fund_portal.errors import ApiError
from fund_portal.repositories.memory import InMemoryStore
from fund_portal.repositories.seed import seed_demo_store
from fund_portal.routes import auth_router, funds_router, portfolios_router, users_router
from fund_portal.schemas.error import ErrorResponse


def _validation_details(exc: RequestValidationError) -> dict:
    return {
        "errors": [
            {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
    }


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Fund Portal API", version="1.0.0")

    store = InMemoryStore()
    if settings.seed_demo_data:
        seed_demo_store(store, bcrypt_rounds=settings.bcrypt_rounds)
    app.state.store = store

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        payload = ErrorResponse(
            code="VALIDATION_ERROR",
            message="Invalid request payload",
            details=_validation_details(exc),
        )
        return JSONResponse(status_code=422, content=payload.model_dump(mode="json"))

    api_prefix = "/api/v1"
    app.include_router(auth_router, prefix=api_prefix)
    app.include_router(funds_router, prefix=api_prefix)
    app.include_router(portfolios_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)

    return app
