import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from service_car.core.config import settings
from service_car.core.logging_config import setup_logging
from service_car.db.session import engine
from service_car.api.api import api_router
from service_car import models  # noqa: F401  registers the table models
from service_car.services.client_service import RemoteUnavailable, build_http_session

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    SQLModel.metadata.create_all(engine)

    # One pooled HTTP session for every remote client lookup
    app.state.http = build_http_session(settings.CLIENT_SERVICE_POOL_SIZE)
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    try:
        yield
    finally:
        app.state.http.close()
        logger.info("%s stopped", settings.PROJECT_NAME)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Only reached when CLIENT_LOOKUP_FAIL_OPEN is off
    @app.exception_handler(RemoteUnavailable)
    async def remote_unavailable_handler(request: Request, exc: RemoteUnavailable):
        logger.error("Failing %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": f"Client service unavailable for client {exc.client_id}"},
        )

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
