from __future__ import annotations

from fastapi import FastAPI

from src.application.dtos.common_dto import HealthResponse, RootResponse
from src.infrastructure.api.middlewares import add_default_middlewares, add_error_handlers
from src.infrastructure.api.routes.processing_routes import router as processing_router
from src.infrastructure.logging import setup_logging

__version__ = "0.1.0"


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title="PixelForge Backend",
        version=__version__,
        description="""
        ## PixelForge Backend API

        Stateless image-transformation service built on NumPy and Pillow
        (no OpenCV). Each request decodes a base64 / data-URL image, applies
        one operation category and re-encodes the result.

        ### Features
        - **Filters**: grayscale, sepia, vintage, noir, warm, cool and preset looks
        - **Transforms**: aspect-ratio-preserving resize, crop, flips
        - **Adjustments**: brightness and saturation sliders
        - **Effects**: edge detection, emboss, sobel, blur, sharpen, threshold, solarize
        - **Batch**: the same options over many images, with per-image results
        - **Output**: PNG, JPEG or WebP as a data URL or raw base64 + bytes

        ### Error Responses
        Processing failures are returned as `success: false` results. HTTP errors:
        - **400 Bad Request**: Uploaded file could not be processed
        - **422 Unprocessable Entity**: Validation error in request body
        - **500 Internal Server Error**: Unexpected server error
        """,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )
    add_default_middlewares(app)
    add_error_handlers(app)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the PixelForge API",
        response_description="API information including status and version",
    )
    def root():
        """Get API root information."""
        return {"status": "ok", "service": "pixelforge-backend", "version": app.version}

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check if the API service is running and healthy",
        response_description="Health status of the API service",
    )
    def health():
        """Check API health status."""
        return {"status": "healthy"}

    app.include_router(processing_router)
    return app


app = create_app()
