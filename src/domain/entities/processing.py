from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any

from src.domain.errors import UnknownOperationError


class Operation(str, Enum):
    FILTER = "filter"
    TRANSFORM = "transform"
    ADJUST = "adjust"
    EFFECT = "effect"

    @classmethod
    def parse(cls, value: Operation | str) -> Operation:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise UnknownOperationError(str(value)) from None


@dataclass(frozen=True)
class ProcessingOptions:
    """Full parameterization of one request.

    `filter` names the sub-operation for BOTH the filter and the effect
    operation. Kept as one field for wire compatibility with existing callers.
    """

    operation: Operation | str
    filter: str | None = None
    intensity: float | None = None
    brightness: float | None = None
    contrast: float | None = None  # accepted, no effect
    saturation: float | None = None
    hue_rotation: float | None = None  # accepted, no effect
    resize_width: int | None = None
    resize_height: int | None = None
    keep_aspect_ratio: bool | None = None
    crop_x: int | None = None
    crop_y: int | None = None
    crop_width: int | None = None
    crop_height: int | None = None
    rotation_angle: float | None = None  # always rejected
    flip_horizontal: bool | None = None
    flip_vertical: bool | None = None
    output_format: str | None = None
    quality: int | None = None
    output_as_binary: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProcessingOptions:
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known and v is not None}
        if "operation" not in kwargs:
            raise UnknownOperationError("<missing>")
        return cls(**kwargs)


@dataclass(frozen=True)
class ImageMetadata:
    width: int
    height: int
    format: str
    size_bytes: int
    processing_time_ms: int = 0


@dataclass(frozen=True)
class ProcessingResult:
    success: bool
    image_data: str | None = None
    binary_data: bytes | None = None
    metadata: ImageMetadata | None = None
    error: str | None = None

    @classmethod
    def ok(
        cls, image_data: str, metadata: ImageMetadata, binary_data: bytes | None = None
    ) -> ProcessingResult:
        return cls(success=True, image_data=image_data, binary_data=binary_data, metadata=metadata)

    @classmethod
    def failure(cls, error: str) -> ProcessingResult:
        return cls(success=False, error=error or "Unknown error")

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "image_data": self.image_data,
            # byte values, same as the JSON shape existing clients consume
            "binary_data": list(self.binary_data) if self.binary_data is not None else None,
            "metadata": asdict(self.metadata) if self.metadata is not None else None,
            "error": self.error,
        }


@dataclass(frozen=True)
class BatchResult:
    processed: int
    successful: int
    failed: int
    results: list[ProcessingResult] = field(default_factory=list)
    total_time_ms: int = 0

    @classmethod
    def from_results(cls, results: list[ProcessingResult], total_time_ms: int = 0) -> BatchResult:
        successful = sum(1 for r in results if r.success)
        return cls(
            processed=len(results),
            successful=successful,
            failed=len(results) - successful,
            results=list(results),
            total_time_ms=total_time_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "processed": self.processed,
            "successful": self.successful,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
            "total_time_ms": self.total_time_ms,
        }


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    width: int | None = None
    height: int | None = None
    size_estimate: int | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.valid:
            return {
                "valid": True,
                "width": self.width,
                "height": self.height,
                "size_estimate": self.size_estimate,
            }
        return {"valid": False, "error": self.error}
