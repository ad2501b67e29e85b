import logging
import time
import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
from backend.app.api.endpoints import router as api_router
from backend.app.core.config import Settings, settings as default_settings
from backend.app.core.errors import RelayError
from backend.app.services.relay import StreamRelay

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["POST", "GET", "DELETE", "HEAD", "OPTIONS", "PATCH"]
# Tus headers are accepted for the browser uploader; resumable uploads are not relayed
ALLOWED_HEADERS = [
    "Tus-Resumable",
    "Upload-Length",
    "Upload-Metadata",
    "Content-Type",
    "Authorization",
    "X-Proxy-Upload",
]
EXPOSED_HEADERS = ["Location", "Tus-Resumable", "Upload-Offset", "Upload-Length"]


def create_app(settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(title=settings.PROJECT_NAME)
    app.state.settings = settings
    app.state.relay = StreamRelay(settings, transport=transport)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        logger.info("<-- %s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            # Inside CORS: the 500 carries the Access-Control headers
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = PlainTextResponse("Error interno", status_code=500)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info("--> %s %s %s %.0fms", request.method, request.url.path, response.status_code, elapsed)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=EXPOSED_HEADERS,
        max_age=86400,
    )

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return PlainTextResponse("Ruta no encontrada", status_code=404)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    app.include_router(api_router)
    return app


app = create_app()
