"""Storefront FastAPI application.

Web server that processes commands synchronously via HTTP. Every request runs
inside the storefront domain context.

Usage:
    uvicorn storefront.api.app:create_app --factory --host 0.0.0.0 --port 8000
"""

import os
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.api import order_router, product_router, user_router
from storefront.api.errors import register_error_handlers
from storefront.domain import logger, storefront
from storefront.utils.logging import add_context, clear_context
from storefront.user.registration import grant_admin


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def _seed_admins() -> None:
    """Grant the admin role to every address in STOREFRONT_ADMIN_EMAILS."""
    emails = [email.strip() for email in os.getenv("STOREFRONT_ADMIN_EMAILS", "").split(",") if email.strip()]
    if not emails:
        return
    with storefront.domain_context():
        for email in emails:
            if grant_admin(email):
                logger.info("Admin granted", email=email)


def create_app(init_domain: bool = True) -> FastAPI:
    """Build the application.

    ``PROTEAN_ENV`` selects the config overlay in ``domain.toml`` (the
    ``production`` overlay moves storage to PostgreSQL). Pass
    ``init_domain=False`` when the caller has already initialized the domain,
    as the test fixtures do.
    """
    if init_domain:
        storefront.init()
        _seed_admins()

    app = FastAPI(
        title="Storefront API",
        description="Clothing storefront: catalog, orders and users",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and bind request details for logging."""
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        add_context(request_id=request_id, path=request.url.path)
        try:
            with storefront.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(product_router)
    app.include_router(order_router)
    app.include_router(user_router)

    register_exception_handlers(app)
    register_error_handlers(app)

    @app.get("/")
    async def root():
        return {"message": "Storefront server running"}

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": {"name": storefront.name}})

    logger.info("Storefront API ready", environment=os.getenv("PROTEAN_ENV", "development"))
    return app
