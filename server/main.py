# server/main.py

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from api import auth, users
from core.config import Settings
from core.exceptions import AppError
from core.security import CredentialService
from database import create_db_engine, create_session_factory, init_db


logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors() or []
    if not errors:
        return "invalid request body"
    first = errors[0]
    field = ".".join(str(x) for x in first.get("loc", []) if x != "body")
    msg = first.get("msg") or "invalid input"
    msg = msg.removeprefix("Value error, ")
    return f"{field}: {msg}" if field else msg


def register_exception_handlers(app: FastAPI, settings: Settings):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s (%s)", request.method, request.url.path,
                         type(exc).__name__, exc.detail or exc.message)
        else:
            logger.warning("%s %s rejected: %s (%s)", request.method, request.url.path,
                           type(exc).__name__, exc.detail or exc.message)
        message = exc.message
        if settings.debug and exc.detail:
            message = f"{message}: {exc.detail}"
        return JSONResponse(status_code=exc.status_code, content={"error": message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.warning("%s %s rejected: ValidationError (%s)", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    engine = create_db_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(title="Blog Accounts")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.credentials = CredentialService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    app.include_router(auth.router)
    app.include_router(users.router)

    logger.info("application ready: database=%s", engine.url.render_as_string(hide_password=True))
    return app


app = create_app()
