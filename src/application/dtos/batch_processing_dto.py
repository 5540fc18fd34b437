from __future__ import annotations

from pydantic import BaseModel, Field

from src.application.dtos.processing_dto import ProcessingOptionsModel, ProcessingResultResponse


class BatchProcessRequest(BaseModel):
    """Request model for processing several images with the same options."""

    images: list[str] = Field(
        ...,
        description="Encoded images (base64 or data URLs); results keep this order",
    )
    options: ProcessingOptionsModel = Field(
        ...,
        description="Options applied to every image",
        examples=[{"operation": "filter", "filter": "sepia"}],
    )


class BatchProcessResponse(BaseModel):
    """Response model for batch image processing."""

    processed: int = Field(..., description="Number of images submitted")
    successful: int = Field(..., description="Number of images processed successfully")
    failed: int = Field(..., description="Number of images that failed")
    results: list[ProcessingResultResponse] = Field(
        ..., description="Per-image results, index-aligned with the request"
    )
    total_time_ms: int = Field(0, description="Total batch duration in milliseconds")
