"""FastAPI application entry point with lifespan, logging, and middleware."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.models import HealthResponse
from app.routers import movies
from app.routers.movies import envelope
from app.services.database import DatabaseService

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = DatabaseService(settings.db_path, timeout=settings.db_timeout)
    db.init_schema()

    movies.init_router(db)
    app.state.db = db

    logger.info("Application started: db=%s", settings.db_path)
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Movies API",
    description="A REST API for creating, reading, and deleting movie records.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s → %d  (%.0f ms)",
        request.method, request.url.path, response.status_code, elapsed,
    )
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Invalid request on %s %s: %s", request.method, request.url.path, exc.errors())
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    return envelope(status.HTTP_400_BAD_REQUEST, "error", f"Invalid request: {problems}")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "failure", "An internal error occurred. Please try again."
    )


@app.get("/health", response_model=HealthResponse, tags=["system"])
def health():
    """Check database connectivity."""
    db: DatabaseService = app.state.db
    db_ok = db.health_check()
    return HealthResponse(status="healthy" if db_ok else "degraded", database=db_ok)


app.include_router(movies.router)


if __name__ == "__main__":
    import uvicorn

    logger.info("Serving on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
