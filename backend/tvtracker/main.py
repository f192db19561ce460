import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from tvtracker.auth.password import PasswordHasher
from tvtracker.auth.tokens import TokenService
from tvtracker.config import API_DESCRIPTION, API_TITLE, VERSION, Settings, get_settings, setup_logging
from tvtracker.controllers.auth_controller import router as auth_router
from tvtracker.controllers.episode_controller import router as episode_router
from tvtracker.controllers.movie_controller import router as movie_router
from tvtracker.controllers.rating_controller import router as rating_router
from tvtracker.controllers.series_controller import router as series_router
from tvtracker.db.database import create_db_engine, create_session_factory, init_db
from tvtracker.exceptions.api import ApiError, InternalError, MethodNotAllowedError, NotFoundError, ValidationError
from tvtracker.repositories import SQLAlchemyUserRepo
from tvtracker.service.auth_service import AuthService

logger = logging.getLogger(__name__)


def _operation(request: Request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", request.url.path)
    return f"{request.method} {path}"


def _identity_context(request: Request) -> str:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        return "anonymous"
    return f"user={identity.subject_id} role={identity.role.value}"


def _error_body(request: Request, error: ApiError, exc: Exception) -> dict:
    body = {"message": error.message, "code": error.code}
    if error.details is not None:
        body["details"] = error.details
    if not request.app.state.settings.is_production:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def _routing_error(request: Request, exc: StarletteHTTPException) -> ApiError:
    details = {"method": request.method, "path": request.url.path}
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return NotFoundError("Route not found", details=details)
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return MethodNotAllowedError(details=details)

    error = ApiError(str(exc.detail) if exc.detail else None, details=details)
    error.status_code = exc.status_code
    error.code = "HTTP_ERROR"
    return error


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError):
        logger.warning(
            f"{_operation(request)} failed for {_identity_context(request)}: "
            f"{exc.status_code} {exc.code} {exc.message}"
        )
        return JSONResponse(status_code=exc.status_code, content=_error_body(request, exc, exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        error = _routing_error(request, exc)
        logger.warning(f"{request.method} {request.url.path} failed: {error.status_code} {error.code}")
        return JSONResponse(
            status_code=error.status_code,
            content=_error_body(request, error, exc),
            headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "Invalid value")
            }
            for err in exc.errors()
        ]
        error = ValidationError("Invalid request data", details=details)
        logger.warning(f"{_operation(request)} rejected for {_identity_context(request)}: {details}")
        return JSONResponse(status_code=error.status_code, content=_error_body(request, error, exc))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            f"{_operation(request)} crashed for {_identity_context(request)}: {str(exc)}",
            exc_info=exc
        )
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=_error_body(request, error, exc))


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_dir)

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=VERSION
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # built once, shared read-only by every request
    engine = engine or create_db_engine(settings.database_url)
    init_db(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_access_token_expire_minutes
    )

    register_exception_handlers(app)

    # include controllers
    app.include_router(auth_router)
    app.include_router(movie_router)
    app.include_router(series_router)
    app.include_router(episode_router)
    app.include_router(rating_router)

    @app.on_event("startup")
    async def bootstrap_admin():
        if not (settings.admin_email and settings.admin_password):
            return

        db = app.state.session_factory()
        try:
            auth_service = AuthService(
                SQLAlchemyUserRepo(db),
                password_hasher=app.state.password_hasher,
                token_service=app.state.token_service
            )
            auth_service.ensure_admin(settings.admin_email, settings.admin_username, settings.admin_password)
        finally:
            db.close()

    @app.get("/")
    async def root():
        return {
            "message": API_TITLE,
            "version": VERSION,
            "endpoints": {
                "auth": "/auth",
                "movies": "/movies",
                "series": "/series",
                "episodes": "/episodes",
                "ratings": "/ratings",
                "documentation": "/docs"
            }
        }

    @app.get("/health")
    def health_check():
        try:
            with app.state.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            database = "connected"
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            database = "unavailable"

        status_code = status.HTTP_200_OK if database == "connected" else status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(
            status_code=status_code,
            content={"status": "healthy" if database == "connected" else "degraded", "database": database}
        )

    logger.info(f"{API_TITLE} {VERSION} initialized ({settings.environment})")
    return app


def run():
    import uvicorn

    uvicorn.run("tvtracker.main:create_app", factory=True, host="0.0.0.0", port=8000)
