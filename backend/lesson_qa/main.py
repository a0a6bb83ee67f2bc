# lesson_qa/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lesson_qa.core import AppError
from lesson_qa.core.config import settings
from lesson_qa.core.exception_handlers import app_error_handler, unhandled_exception_handler
from lesson_qa.core.logging_config import configure_logging
from lesson_qa.db.session import init_db
from lesson_qa.middleware.request_logging import RequestLoggingMiddleware
from lesson_qa.routers.health import router as health_router
from lesson_qa.routers.qa_runs import router as qa_runs_router

configure_logging()


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_AUTO_CREATE:
        init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    app.add_middleware(RequestLoggingMiddleware)

    # CORS_ALLOW_ORIGINS="http://localhost:3000,https://qa.example.com"
    allow_origins = _split_csv(settings.CORS_ALLOW_ORIGINS) or ["http://localhost:3000"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routers
    app.include_router(health_router)
    app.include_router(qa_runs_router)

    return app


app = create_app()
