# taskapi/main.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from taskapi.api import auth, health, todos
from taskapi.core.config import Settings
from taskapi.core.errors import AuthenticationError, TaskApiError
from taskapi.core.observability import setup_logging
from taskapi.core.security import TokenService
from taskapi.database import create_db_engine, create_session_factory, init_db


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_level, settings.log_format)

    engine = create_db_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        logger.info(f"TaskApi started ({settings.environment})")
        yield
        engine.dispose()
        logger.info("TaskApi shutting down")

    app = FastAPI(title="TaskApi", lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = TokenService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(todos.router)

    register_error_handlers(app)
    return app


# -------------------------------
# Error Handlers
# -------------------------------

def register_error_handlers(app: FastAPI):

    @app.exception_handler(TaskApiError)
    async def task_api_error_handler(request: Request, exc: TaskApiError):
        logger.warning(
            f"{exc.code}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # input values are left out; they may hold passwords
        details = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
            }
            for e in exc.errors()
        ]
        logger.warning(f"Validation error on {request.url.path}: {details}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invalid request data",
                    "details": details,
                },
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}},
        )


app = create_app()
