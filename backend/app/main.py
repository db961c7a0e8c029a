from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import mariadb

from .config import settings
from .db import init_pool, init_schema
from .errors import ErrorKind, StoreError, ValidationFailure
from .validation import MSG_NAME

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


# --- Startup: pool + schema, fail fast if the DB is unreachable ---
@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.DB_INIT_ON_STARTUP:
        try:
            init_pool()
            init_schema()
        except mariadb.Error:
            log.exception("Failed to initialise database")
            raise
    yield


# --- App ---
app = FastAPI(title="School Locator API", lifespan=lifespan)

# --- CORS ---
_env_origins = settings.CORS_ALLOW_ORIGINS.strip()
if not _env_origins or _env_origins == "*":
    allow_origins = ["*"]
else:
    allow_origins = [o.strip() for o in _env_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- GZIP ---
app.add_middleware(GZipMiddleware, minimum_size=1024)


# --- Error mapping ---
@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure):
    status = 503 if exc.kind is ErrorKind.STORE_UNAVAILABLE else 400
    log.info("[%s] rejected: %s %s", request.url.path, exc.kind.value, exc.message)
    return JSONResponse(
        status_code=status,
        content={
            "status": "error",
            "message": "Validation failed" if status == 400 else "Service unavailable",
            **exc.to_dict(),
        },
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Undecodable JSON bodies carry no name either; report them like an empty body
    if any(tuple(err.get("loc", ()))[:1] == ("body",) for err in exc.errors()):
        return await validation_failure_handler(request, ValidationFailure(ErrorKind.INVALID_NAME, MSG_NAME))
    return await request_validation_exception_handler(request, exc)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    log.error("[%s] store error: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={
            "status": "error",
            "message": "Internal server error",
            "error": "An unexpected error occurred. Please try again later.",
        },
    )


# --- Routers ---
from .routers import health, schools  # noqa: E402

app.include_router(health.router)
app.include_router(schools.router)


# --- Root check ---
@app.get("/")
def root():
    return {
        "message": "School Management API is running",
        "time": datetime.now(timezone.utc).isoformat(),
    }


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
