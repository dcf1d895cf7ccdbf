from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logger import setup_logger
from common.mongo.client import close_client
from common.middleware.request_trace import RequestTraceMiddleware

from .api.health import router as health_router
from .api.v1 import api_router
from .config import get_settings
from .exceptions import (
    BookmarkServiceError,
    ConflictError,
    NoBookmarksError,
    NoLabelsError,
    NotFoundError,
    StorageError,
    UpstreamLookupError,
)


logger = logging.getLogger(__name__)

# 도메인 예외 -> HTTP 상태 코드
ERROR_STATUS_CODES: dict[type[BookmarkServiceError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    NoBookmarksError: status.HTTP_404_NOT_FOUND,
    NoLabelsError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UpstreamLookupError: status.HTTP_502_BAD_GATEWAY,
}


def status_code_for(exc: BookmarkServiceError) -> int:
    for exc_type, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_bookmark_service_error(
    request: Request, exc: BookmarkServiceError
) -> JSONResponse:
    code = status_code_for(exc)
    if code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
    try:
        yield
    finally:
        close_client()


def create_app() -> FastAPI:
    setup_logger(name="bookmark-service")
    settings = get_settings()
    app = FastAPI(
        title="Message Bookmark Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    # 공통 Request/Span ID 로그 미들웨어
    app.add_middleware(RequestTraceMiddleware, user_id_header=settings.user_id_header)
    app.add_exception_handler(BookmarkServiceError, handle_bookmark_service_error)  # type: ignore[arg-type]

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    import uvicorn

    port = get_settings().port
    uvicorn.run(
        "bookmark_service.app.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
