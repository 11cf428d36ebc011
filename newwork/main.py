# newwork-server/newwork/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from newwork.api.v1.api import api_router
from newwork.core.config import settings
from newwork.core.exceptions import ServiceError, Unauthenticated
from newwork.db.seed import seed_demo_data
from newwork.db.store import Database
from newwork.services.polishing import FeedbackPolisher

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def service_error_handler(request: Request, exc: ServiceError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(seed: bool = settings.SEED_DEMO_DATA) -> FastAPI:
    app = FastAPI(title=settings.PROJECT_NAME)

    # One store and one polisher per running service, shared by every request
    app.state.db = Database()
    app.state.polisher = FeedbackPolisher.from_settings()
    if seed:
        seed_demo_data(app.state.db, settings.DEMO_PASSWORD)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Include the main router for all routes prefixed with /api
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health", response_class=PlainTextResponse)
    def health_check():
        return "OK"

    return app


app = create_app()
