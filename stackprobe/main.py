from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from stackprobe.core.config import get_settings
from stackprobe.core.limiter import limiter
from stackprobe.core.middleware import RequestIdMiddleware, SecurityHeadersMiddleware
from stackprobe.repos.router import router as repos_router


def create_app() -> FastAPI:
    settings = get_settings()

    _app = FastAPI(
        title="stackprobe API",
        description="Infers the technology stack of hosted repositories without cloning them",
        version="0.1.0",
    )

    # ---------------------------------------------------------------------------
    # Rate limiter state — SlowAPI reads limiter from app.state
    # ---------------------------------------------------------------------------
    _app.state.limiter = limiter
    _app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # ---------------------------------------------------------------------------
    # Middleware (registered outermost → innermost; executed innermost → outermost)
    # ---------------------------------------------------------------------------

    # CORS first so preflight OPTIONS requests never reach the rate limiter.
    _app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # SlowAPI before security headers so 429s also get security headers
    _app.add_middleware(SlowAPIMiddleware)

    _app.add_middleware(SecurityHeadersMiddleware)

    # Request ID — inject / forward X-Request-ID and bind to ContextVar
    _app.add_middleware(RequestIdMiddleware)

    # ---------------------------------------------------------------------------
    # Sentry
    # ---------------------------------------------------------------------------
    from stackprobe.core.sentry import init_sentry

    init_sentry(
        dsn=settings.sentry_dsn,
        environment="development" if settings.debug else "production",
    )

    # ---------------------------------------------------------------------------
    # Logging — configure structlog before any routers log anything
    # ---------------------------------------------------------------------------
    from stackprobe.core.logging import configure_structlog

    configure_structlog(debug=settings.debug)

    # ---------------------------------------------------------------------------
    # Routes
    # ---------------------------------------------------------------------------

    @_app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    _app.include_router(repos_router)

    return _app


app = create_app()
