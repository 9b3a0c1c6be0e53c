from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.analyze.router import router as analyze_router
from app.core.config import get_settings
from app.core.limiter import limiter
from app.core.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from app.history.router import router as history_router
from app.llm.router import router as llm_router
from app.rules.router import router as rules_router


@asynccontextmanager
async def lifespan(_app: FastAPI):
    from app.db.session import create_tables

    await create_tables()
    yield


def create_app() -> FastAPI:
    settings = get_settings()

    _app = FastAPI(
        title="PerfPilot API",
        description="Next.js performance analysis: code rules, bundle analysis and recommendations",
        version="0.1.0",
        lifespan=lifespan,
    )

    # ---------------------------------------------------------------------------
    # Rate limiter state: SlowAPI reads the limiter from app.state
    # ---------------------------------------------------------------------------
    _app.state.limiter = limiter
    _app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # ---------------------------------------------------------------------------
    # Middleware (registered outermost → innermost; executed innermost → outermost)
    # ---------------------------------------------------------------------------

    # Origins come from settings; "*" by default for the local web client.
    _app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 429s also get security headers
    _app.add_middleware(SlowAPIMiddleware)

    _app.add_middleware(SecurityHeadersMiddleware)

    _app.add_middleware(RequestContextMiddleware)

    # ---------------------------------------------------------------------------
    # Sentry: initialised here so it captures startup errors too
    # ---------------------------------------------------------------------------
    from app.core.sentry import init_sentry

    init_sentry(
        dsn=settings.sentry_dsn,
        environment="development" if settings.debug else "production",
    )

    # ---------------------------------------------------------------------------
    # Logging: configure structlog before any routers log anything
    # ---------------------------------------------------------------------------
    from app.core.logging import configure_structlog

    configure_structlog(debug=settings.debug)

    # ---------------------------------------------------------------------------
    # Routes
    # ---------------------------------------------------------------------------

    @_app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    _app.include_router(analyze_router)
    _app.include_router(rules_router)
    _app.include_router(llm_router)
    _app.include_router(history_router)

    return _app


app = create_app()
