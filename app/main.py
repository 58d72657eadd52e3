"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.middleware.route_guard import RouteGuardMiddleware
from app.middleware.timeout import RequestTimeoutMiddleware

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="InsurMap API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

register_exception_handlers(app)

# Last added runs first: CORS, then the timeout, then the page-route guard.
app.add_middleware(
    RouteGuardMiddleware,
    protected_prefixes=settings.PROTECTED_PATH_PREFIXES,
    cookie_name=settings.SESSION_COOKIE_NAME,
    login_path=settings.LOGIN_PATH,
)
app.add_middleware(RequestTimeoutMiddleware, timeout_sec=settings.REQUEST_TIMEOUT_SEC)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "InsurMap API"}
