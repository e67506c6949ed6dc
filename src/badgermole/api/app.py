"""
badgermole.api.app

FastAPI app factory for badgermole.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Own the process-lifetime registry and OTP store (or accept injected ones).
- Start and stop the expiry sweeper and the SSH issuance listener.
"""

from __future__ import annotations

from fastapi import FastAPI

from badgermole.api.routers.health import router as health_router
from badgermole.api.routers.login import router as login_router
from badgermole.api.routers.session import router as session_router
from badgermole.api.routers.signup import router as signup_router
from badgermole.identity.registry import IdentityRegistry, MemoryIdentityRegistry
from badgermole.observability.logging import configure_logging, get_logger
from badgermole.observability.middleware import RequestContextMiddleware
from badgermole.otp.store import MemoryOtpStore, OtpStore
from badgermole.otp.sweeper import ExpirySweeper
from badgermole.settings import Settings
from badgermole.ssh.server import SshOtpServer

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    registry: IdentityRegistry | None = None,
    store: OtpStore | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    app = FastAPI(
        title="badgermole",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.registry = registry if registry is not None else MemoryIdentityRegistry()
    app.state.otp_store = (
        store if store is not None else MemoryOtpStore(lifetime=settings.otp_lifetime)
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(signup_router)
    app.include_router(login_router)
    app.include_router(session_router)

    @app.on_event("startup")
    async def _startup() -> None:
        log.info("startup", env=settings.env)
        app.state.ssh_server = None
        if settings.ssh_enabled:
            ssh_server = SshOtpServer(
                settings=settings,
                registry=app.state.registry,
                store=app.state.otp_store,
            )
            # Raising here aborts startup: no web login without an issuance side.
            await ssh_server.start()
            app.state.ssh_server = ssh_server

        sweeper = ExpirySweeper(
            store=app.state.otp_store,
            lifetime=settings.otp_lifetime,
            interval=settings.sweep_interval_seconds,
        )
        sweeper.start()
        app.state.sweeper = sweeper

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        ssh_server = getattr(app.state, "ssh_server", None)
        if ssh_server is not None:
            await ssh_server.stop()
        sweeper = getattr(app.state, "sweeper", None)
        if sweeper is not None:
            await sweeper.stop()
        log.info("shutdown")

    return app


# --- Module Notes -----------------------------------------------------------
# This is the only place where the registry and store are constructed; every consumer
# receives them from here.
