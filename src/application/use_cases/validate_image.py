from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities.processing import ValidationResult
from src.domain.errors import ImageProcessingError
from src.infrastructure.codec.image_codec import ImageCodec


@dataclass
class ValidateImageUseCase:
    """Decode only: report dimensions without running any operation."""

    codec: ImageCodec = field(default_factory=ImageCodec)

    def execute(self, image_data: str) -> ValidationResult:
        try:
            matrix = self.codec.decode(image_data)
        except ImageProcessingError as exc:
            return ValidationResult(valid=False, error=str(exc))
        height, width = matrix.shape[:2]
        return ValidationResult(
            valid=True,
            width=int(width),
            height=int(height),
            size_estimate=len(image_data),
        )
