import sys
import time
from contextlib import asynccontextmanager
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from picturebox.config import Settings, settings
from picturebox.routes.health import router as health_router
from picturebox.routes.pages import router as pages_router
from picturebox.routes.pictures import router as pictures_router
from picturebox.services.storage import UPLOADS_MOUNT


def _configure_logging(app_settings: Settings) -> None:
    logger.configure(patcher=lambda record: record["extra"].setdefault("request_id", "-"))
    logger.remove()
    logger.add(
        sys.stderr,
        level=app_settings.log_level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | req={extra[request_id]} | {name}:{function}:{line} | {message}",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings: Settings = app.state.settings
    _configure_logging(app_settings)
    upload_path = app_settings.upload_path
    logger.bind(request_id="-").info(
        "Starting app app_name={} debug={} log_level={} upload_path={}",
        app_settings.app_name,
        app_settings.debug,
        app_settings.log_level,
        str(upload_path.resolve()),
    )
    logger.bind(request_id="-").info("Server is running on http://localhost:{}", app_settings.port)
    yield
    logger.bind(request_id="-").info("Shutting down app app_name={}", app_settings.app_name)


async def not_found_for_unsupported_method(request: Request, exc: StarletteHTTPException) -> Response:
    # Unsupported methods on a known path are reported like unknown routes.
    if exc.status_code == 405:
        exc = StarletteHTTPException(status_code=404)
    return await http_exception_handler(request, exc)


async def add_request_context(request: Request, call_next) -> Response:
    request_id = request.headers.get("x-request-id", str(uuid4()))
    bound_logger = logger.bind(request_id=request_id)
    start = time.perf_counter()
    bound_logger.info("Request start method={} path={}", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        bound_logger.exception("Request failed method={} path={}", request.method, request.url.path)
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    bound_logger.info(
        "Request finish method={} path={} status={} duration_ms={:.2f}",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    response.headers["X-Request-ID"] = request_id
    return response


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(title=app_settings.app_name, debug=app_settings.debug, lifespan=lifespan)
    app.state.settings = app_settings

    app.add_exception_handler(StarletteHTTPException, not_found_for_unsupported_method)
    app.middleware("http")(add_request_context)

    app.include_router(health_router)
    app.include_router(pages_router)
    app.include_router(pictures_router)

    # The directory is created during startup, so existence is checked on first request.
    app.mount(
        UPLOADS_MOUNT,
        StaticFiles(directory=app_settings.upload_dir, check_dir=False),
        name="uploads",
    )
    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
