from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from src.domain.entities.processing import ProcessingOptions


class ProcessingOptionsModel(BaseModel):
    """Declarative options for one pipeline run. Only `operation` is required."""

    operation: str = Field(
        ...,
        description="Operation category: 'filter', 'transform', 'adjust' or 'effect'",
        examples=["filter"],
    )
    filter: Optional[str] = Field(
        None,
        description="Filter name for operation=filter, effect name for operation=effect",
        examples=["sepia"],
    )
    intensity: Optional[float] = Field(
        None, description="Filter/effect strength (threshold uses 0.0 to 1.0)", examples=[1.0]
    )
    brightness: Optional[float] = Field(
        None, description="Brightness (1.0 = no change, >1.0 = brighter, <1.0 = darker)", examples=[1.2]
    )
    contrast: Optional[float] = Field(None, description="Accepted but currently has no effect")
    saturation: Optional[float] = Field(
        None, description="Saturation (<0.5 = grayscale, 1.0 = no change)", examples=[0.8]
    )
    hue_rotation: Optional[float] = Field(None, description="Accepted but currently has no effect")
    resize_width: Optional[int] = Field(None, description="Target width in pixels", ge=1)
    resize_height: Optional[int] = Field(None, description="Target height in pixels", ge=1)
    keep_aspect_ratio: Optional[bool] = Field(
        None, description="Preserve the aspect ratio when resizing (default true)"
    )
    crop_x: Optional[int] = Field(None, description="Crop origin X", ge=0)
    crop_y: Optional[int] = Field(None, description="Crop origin Y", ge=0)
    crop_width: Optional[int] = Field(None, description="Crop width", ge=1)
    crop_height: Optional[int] = Field(None, description="Crop height", ge=1)
    rotation_angle: Optional[float] = Field(
        None, description="Rotation is not implemented; any value makes the request fail"
    )
    flip_horizontal: Optional[bool] = Field(None, description="Mirror left-right")
    flip_vertical: Optional[bool] = Field(None, description="Mirror top-bottom")
    output_format: Optional[str] = Field(
        None, description="Output format: png (default), jpeg/jpg or webp", examples=["png"]
    )
    quality: Optional[int] = Field(None, description="JPEG quality (default 85)", ge=0, le=100)
    output_as_binary: Optional[bool] = Field(
        None, description="Return raw base64 plus binary_data instead of a data URL"
    )

    def to_options(self) -> ProcessingOptions:
        return ProcessingOptions.from_dict(self.model_dump(exclude_none=True))


class ProcessImageRequest(BaseModel):
    """Request model for processing a single image."""

    image_data: str = Field(
        ...,
        description="Base64 image data, optionally as a data URL (data:image/png;base64,...)",
    )
    options: ProcessingOptionsModel = Field(..., description="Processing options")


class ImageMetadataModel(BaseModel):
    width: int = Field(..., description="Output width in pixels", examples=[800])
    height: int = Field(..., description="Output height in pixels", examples=[600])
    format: str = Field(..., description="Output format", examples=["png"])
    size_bytes: int = Field(..., description="Size of the encoded output in bytes")
    processing_time_ms: int = Field(0, description="Processing duration in milliseconds")


class ProcessingResultResponse(BaseModel):
    """Outcome of one image. On failure only `error` is set."""

    success: bool = Field(..., description="Whether processing succeeded")
    image_data: Optional[str] = Field(
        None, description="Data URL, or raw base64 when output_as_binary is true"
    )
    binary_data: Optional[list[int]] = Field(
        None, description="Encoded output bytes (only when output_as_binary is true)"
    )
    metadata: Optional[ImageMetadataModel] = Field(None, description="Output image metadata")
    error: Optional[str] = Field(None, description="Error message on failure")


class ValidateImageRequest(BaseModel):
    image_data: str = Field(..., description="Base64 image data or data URL to validate")


class ValidateImageResponse(BaseModel):
    valid: bool = Field(..., description="Whether the image could be decoded")
    width: Optional[int] = Field(None, description="Width in pixels")
    height: Optional[int] = Field(None, description="Height in pixels")
    size_estimate: Optional[int] = Field(None, description="Length of the submitted string")
    error: Optional[str] = Field(None, description="Decode error message")
