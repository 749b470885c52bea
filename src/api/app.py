"""FastAPI application factory for the Recipe Vision Service.

create_app() wires configuration, the inference client, the three pipeline
stages and upload staging into a FastAPI instance. Everything is constructed
explicitly here and stored on ``app.state``; routes receive it through
dependencies, so tests can inject a fake inference client.
"""

import time
from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.pipeline.ingredients import ImageIngredientExtractor
from src.pipeline.recipes import RecipeSynthesizer
from src.pipeline.videos import VideoQueryDeriver
from src.providers.gemini import GeminiClient
from src.uploads.staging import UploadStaging, exceeds_upload_limit, image_too_large
from src.utils.config import Config, config
from src.utils.exceptions import APIError
from src.utils.logger import logger

SERVICE_NAME = "Recipe Vision Service"
API_VERSION = "1.0.0"
UPLOAD_PATH = "/api/analyze-image"


def create_app(
    settings: Optional[Config] = None,
    inference_client: Optional[GeminiClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration to use. Defaults to the module-level config.
        inference_client: Provider client to inject. When omitted, settings are
            validated and a GeminiClient is built from them.

    Returns:
        Configured FastAPI instance.

    Raises:
        ValueError: If settings are invalid (e.g. GEMINI_API_KEY missing).
    """
    settings = settings or config
    if inference_client is None:
        settings.validate()
        inference_client = GeminiClient.from_config(settings)

    app = FastAPI(
        title=SERVICE_NAME,
        version=API_VERSION,
        description="Turns a photo of ingredients into a recipe and a matching video search",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.extractor = ImageIngredientExtractor(inference_client, settings.max_image_bytes)
    app.state.synthesizer = RecipeSynthesizer(inference_client)
    app.state.video_deriver = VideoQueryDeriver(inference_client)
    app.state.staging = UploadStaging(settings.UPLOAD_DIR, settings.max_image_bytes)

    # Middleware added later wraps earlier ones: CORS outermost, size guard innermost
    @app.middleware("http")
    async def limit_upload_size(request: Request, call_next):
        """Reject oversized image uploads before the multipart body is read."""
        content_length = request.headers.get("content-length")
        if request.url.path == UPLOAD_PATH and exceeds_upload_limit(content_length, settings.max_image_bytes):
            logger.warning(
                f"Rejected upload with Content-Length {content_length} (limit {settings.MAX_IMAGE_SIZE_MB}MB)",
                extra={"request_id": getattr(request.state, "request_id", None)},
            )
            error = image_too_large(settings.max_image_bytes)
            return JSONResponse(status_code=error.status_code, content=error.to_dict())
        return await call_next(request)

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        """Tag each request with an id and log method, path, status and latency."""
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Render API errors as ``{"error", "details"?}``."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies are client errors (400), reported in the same shape."""
        details = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        logger.warning(f"Invalid request body for {request.url.path}: {details}")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": details},
        )

    @app.get("/health")
    async def health_check():
        """Liveness probe; does not call the inference provider."""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": API_VERSION,
            "model": settings.GEMINI_MODEL,
            "vision_model": settings.IMAGE_DETECTION_MODEL,
        }

    app.include_router(router, prefix="/api", tags=["Pipeline"])

    logger.info(
        f"{SERVICE_NAME} configured (model={settings.GEMINI_MODEL}, "
        f"vision_model={settings.IMAGE_DETECTION_MODEL}, upload_dir={settings.UPLOAD_DIR}, "
        f"max_image={settings.MAX_IMAGE_SIZE_MB}MB)"
    )
    return app
