from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from .api.v1.auth import router as auth_router
from .api.v1.subtask import router as subtask_router
from .api.v1.task import router as task_router
from .core.config import DEFAULT_SECRET_KEY, Settings
from .core.exceptions import TaskboardError
from .db.base import Base, build_engine, build_session_factory
from .utils.logger import get_logger

# Import all models to register them with SQLAlchemy
from .db.models import User, Task, Subtask  # noqa: F401

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(error: dict) -> str:
    loc = error.get("loc") or ()
    field = str(loc[-1]) if loc else "request"

    if error.get("type") == "missing":
        return f"{field.capitalize()} is required"
    if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
        # Message raised by a schema validator, e.g. "Title is required"
        return str(error["ctx"]["error"])
    return f"{field}: {error.get('msg', 'Invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, exc: TaskboardError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = _describe_validation_error(errors[0]) if errors else "Invalid request"
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(settings: Settings) -> FastAPI:
    if settings.secret_key == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set, falling back to the default session secret")

    engine = build_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title="Taskboard API", version="1.0.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(task_router)
    app.include_router(subtask_router)

    @app.get("/health", status_code=status.HTTP_200_OK)
    async def health_check():
        return {"status": "healthy"}

    logger.info(f"Application created with database {engine.url.render_as_string(hide_password=True)}")
    return app
