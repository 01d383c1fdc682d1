from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import signal, sys

from shortlink.core.config import settings
from shortlink.core.errors import InvalidInput, StoreFailure
from shortlink.core.logging_config import configure_logging
from shortlink.db.Connection import database
from shortlink.api import shortener
from shortlink.routers import health

logger = configure_logging()
logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    database.init_db()
    database.verify_database_connection()
    database.verify_redis_connection()
    yield
    logger.info("Application shutdown.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="URL shortener with idempotent codes and access statistics",
    lifespan=lifespan,
)

# health routes first so /{code} does not swallow them
app.include_router(health.router)
app.include_router(shortener.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    errors = [{"loc": list(exc.loc), "msg": str(exc), "type": "value_error"}]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure):
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def _shutdown(signum, frame):
    logger.info("Shutting down gracefully...")
    try:
        database.engine.dispose()
    except Exception:
        logger.debug("Error disposing DB engine")
    if database.redis_client is not None:
        try:
            database.redis_client.close()
        except Exception:
            logger.debug("Error closing Redis client")
    sys.exit(0)

signal.signal(signal.SIGTERM, _shutdown)
signal.signal(signal.SIGINT, _shutdown)
