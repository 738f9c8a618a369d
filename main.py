# main.py
import asyncio
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.collection.config import engine_config
from app.collection.errors import CollectionError, ValidationError
from app.collection.service import CollectionService
from middleware import RequestContextMiddleware
from routes.collection import router as collection_router
from routes.health import router as health_router
from routes.mock_admin import router as mock_admin_router
from services.observability import configure_logging
from settings import settings, validate_env_settings

logger = logging.getLogger("momo_mock")

DEFAULT_PORT = 3000


def _resolve_port() -> int:
    raw = (os.getenv("PORT") or "").strip()
    return int(raw) if raw else int(settings.PORT or DEFAULT_PORT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    collection: CollectionService = app.state.collection
    collection.scheduler.start(asyncio.get_running_loop())
    logger.info("mock MoMo collection server ready profile=%s", collection.config.profile)
    try:
        yield
    finally:
        collection.scheduler.shutdown()
        # let the scheduler's shutdown callback run before the loop goes away
        await asyncio.sleep(0)


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    validate_env_settings()

    app = FastAPI(title="MoMo Collection Mock", version="1.0.0", lifespan=lifespan)
    app.state.collection = CollectionService.from_config(engine_config())

    app.add_middleware(RequestContextMiddleware)

    # -----------------------------
    # ROUTERS
    # -----------------------------
    app.include_router(collection_router)
    app.include_router(mock_admin_router)
    app.include_router(health_router)

    @app.exception_handler(CollectionError)
    async def collection_error_handler(request: Request, exc: CollectionError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        err = ValidationError("Invalid request")
        return JSONResponse(status_code=err.status_code, content=err.to_body())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=_resolve_port())
