import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from status_api.api import containers
from status_api.api import health
from status_api.core import logging as log_setup
from status_api.core.config import Settings
from status_api.domain.ports import ContainerEngine
from status_api.services.container_service import ContainerStatusService
from status_api.services.docker_runtime import DockerSDKEngine

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, engine: ContainerEngine | None = None) -> FastAPI:
    """
    Build the API. When no engine is given, a DockerSDKEngine is created at
    startup and closed at shutdown; an injected engine is left to its owner.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = engine is None
        if owned:
            try:
                active_engine = DockerSDKEngine(settings)
            except Exception:
                logger.critical("Failed to create Docker client", exc_info=True)
                raise
        else:
            active_engine = engine

        app.state.engine = active_engine
        app.state.container_service = ContainerStatusService(active_engine)
        yield

        if owned:
            active_engine.close()

    app = FastAPI(title="Container Status API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(containers.router)

    # ---------- Error bodies: always {"error": "..."} ----------

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": "Invalid request"}, status_code=422)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    return app


def main():
    settings = Settings()
    log_setup.setup(settings.LOG_LEVEL)
    logger.info("Starting Container Status API on %s:%d", settings.HOST, settings.PORT)
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
