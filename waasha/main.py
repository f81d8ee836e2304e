import logging

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from waasha.config import get_settings
from waasha.core.exceptions import WaashaError
from waasha.core.logging_config import configure_logging
from waasha.database import create_db_and_tables, get_session, ping
from waasha.routers import auth, providers, services

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

GENERIC_ERROR_MESSAGE = "An unexpected server error occurred. Please try again later."


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input."

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{field or 'body'}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(WaashaError)
    async def waasha_error_handler(request: Request, exc: WaashaError):
        if exc.status_code >= 500:
            logger.error("%s on %s %s", type(exc).__name__, request.method, request.url.path)
        else:
            logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _first_validation_message(exc)
        logger.info("Rejected request body on %s %s: %s", request.method, request.url.path, message)
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(exc.status_code, f"Route {request.method} {request.url.path} not found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.critical("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.APP_NAME, version=settings.VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (auth.router, providers.router, services.router):
        app.include_router(router)
        # the web frontend calls the same routes under /api
        app.include_router(router, prefix=API_PREFIX, include_in_schema=False)

    register_exception_handlers(app)

    @app.on_event("startup")
    def on_startup():
        logger.info("%s starting in %s mode", settings.APP_NAME, settings.ENVIRONMENT)
        create_db_and_tables()

    @app.get("/")
    def root():
        return {"success": True, "message": f"Welcome to {settings.APP_NAME} v{settings.VERSION}"}

    @app.get("/health")
    def health(session: Session = Depends(get_session)):
        try:
            ping(session)
            db_status = "ok"
        except SQLAlchemyError:
            logger.error("Database health check failed", exc_info=True)
            db_status = "error"

        healthy = db_status == "ok"
        return JSONResponse(
            status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "success": healthy,
                "status": "ok" if healthy else "degraded",
                "version": settings.VERSION,
                "database_status": db_status,
            },
        )

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "waasha.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "DEV",
        log_level=settings.LOG_LEVEL.lower(),
    )
