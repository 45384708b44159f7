# =============================================================================
# 🚀 Phoenix Cloud storefront API (main.py)
# =============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

import config
from storage import Storage, get_storage
from utils.errors import DatabaseUnavailable, DuplicateKey, NotFound, ValidationError

# -------------------------------------------------------------------------
# 1️⃣ Logging
# -------------------------------------------------------------------------
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("phoenix")


# -------------------------------------------------------------------------
# 2️⃣ Lifespan: one Storage (and pool) per process
# -------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    storage = Storage.from_url(config.DATABASE_URL)
    app.state.storage = storage
    try:
        await run_in_threadpool(storage.initialize)
    except DatabaseUnavailable:
        logger.warning("Database unreachable at startup; schema upgrade deferred to the first request")
    yield
    storage.dispose()
    logger.info("Storage disposed")


app = FastAPI(title="Phoenix Cloud Storefront API", version="1.0", lifespan=lifespan)

# -------------------------------------------------------------------------
# 3️⃣ Middleware
# -------------------------------------------------------------------------
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET,
    max_age=config.SESSION_MAX_AGE,
    session_cookie=config.SESSION_COOKIE_NAME,
    same_site=config.SESSION_SAME_SITE,
    https_only=config.SESSION_HTTPS_ONLY,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------------------------------------------------
# 4️⃣ Error handlers: domain errors -> JSON bodies
# -------------------------------------------------------------------------
def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())[1:]),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return _error(400, "Invalid input", details=details)


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return _error(400, "Invalid input", details=[{"field": "", "message": str(exc)}])


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return _error(404, str(exc))


@app.exception_handler(DuplicateKey)
async def duplicate_handler(request: Request, exc: DuplicateKey):
    return _error(409, str(exc))


@app.exception_handler(DatabaseUnavailable)
async def unavailable_handler(request: Request, exc: DatabaseUnavailable):
    return _error(503, "Database unavailable")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


# -------------------------------------------------------------------------
# 5️⃣ Routers
# -------------------------------------------------------------------------
from routes import admin_users, auth, categories, content, faqs, plans, subcategories, team_members  # noqa: E402

app.include_router(auth.router)
app.include_router(admin_users.router)
app.include_router(categories.router)
app.include_router(subcategories.router)
app.include_router(plans.router)
app.include_router(faqs.router)
app.include_router(team_members.router)
app.include_router(content.router)


# -------------------------------------------------------------------------
# 6️⃣ Health
# -------------------------------------------------------------------------
@app.get("/health")
def health(storage: Storage = Depends(get_storage)):
    if storage.ping():
        return {"status": "ok", "database": "up"}
    return JSONResponse(status_code=503, content={"status": "degraded", "database": "down"})
