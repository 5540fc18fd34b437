from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from src.domain.entities.processing import (
    ImageMetadata,
    Operation,
    ProcessingOptions,
    ProcessingResult,
)
from src.domain.errors import ImageProcessingError, UnknownOperationError
from src.domain.services.adjustment_engine import AdjustmentEngine
from src.domain.services.effect_engine import EffectEngine
from src.domain.services.filter_engine import FilterEngine
from src.domain.services.transform_engine import TransformEngine
from src.infrastructure.codec.image_codec import (
    ImageCodec,
    normalize_format,
    to_base64,
    to_data_url,
)

logger = logging.getLogger(__name__)


@dataclass
class ProcessImageUseCase:
    """
    Run one encoded image through decode -> operation -> encode.

    Exactly one engine runs per call, chosen by `options.operation`. The
    pipeline has two terminal states: any failure at any stage returns a
    failed ProcessingResult and nothing from the partially processed buffer
    is kept. Unexpected exceptions are contained here as well, so callers
    (the batch runner in particular) never see them.
    """

    codec: ImageCodec = field(default_factory=ImageCodec)
    filters: FilterEngine = field(default_factory=FilterEngine)
    transforms: TransformEngine = field(default_factory=TransformEngine)
    adjustments: AdjustmentEngine = field(default_factory=AdjustmentEngine)
    effects: EffectEngine = field(default_factory=EffectEngine)

    def execute(
        self, image_data: str, options: ProcessingOptions | dict[str, Any]
    ) -> ProcessingResult:
        """
        Process a single image.

        Args:
            image_data: Bare base64 payload or a full `data:<mime>;base64,` URL
            options: ProcessingOptions, or a plain dict in the request schema

        Returns:
            ProcessingResult; `success` is False and `error` is set on any failure
        """
        started = time.perf_counter()
        try:
            return self._run(image_data, options, started)
        except ImageProcessingError as exc:
            logger.warning("Image processing failed: %s", exc)
            return ProcessingResult.failure(str(exc))
        except Exception as exc:
            logger.exception("Unexpected fault during image processing")
            return ProcessingResult.failure(f"Internal error during image processing: {exc}")

    def _run(
        self, image_data: str, options: ProcessingOptions | dict[str, Any], started: float
    ) -> ProcessingResult:
        if isinstance(options, dict):
            options = ProcessingOptions.from_dict(options)

        matrix = self.codec.decode(image_data)
        matrix = self._apply_operation(matrix, options)

        fmt = normalize_format(options.output_format)
        encoded = self.codec.encode(matrix, fmt, options.quality)

        if options.output_as_binary:
            image_out = to_base64(encoded)
            binary_out: bytes | None = encoded
        else:
            image_out = to_data_url(encoded, fmt)
            binary_out = None

        # metadata reflects the final buffer, after any resize or crop
        height, width = matrix.shape[:2]
        metadata = ImageMetadata(
            width=int(width),
            height=int(height),
            format=fmt,
            size_bytes=len(encoded),
            processing_time_ms=int((time.perf_counter() - started) * 1000),
        )
        return ProcessingResult.ok(image_out, metadata, binary_out)

    def _apply_operation(self, matrix: np.ndarray, options: ProcessingOptions) -> np.ndarray:
        operation = Operation.parse(options.operation)

        if operation is Operation.FILTER:
            return self.filters.apply(matrix, options)
        if operation is Operation.TRANSFORM:
            return self.transforms.apply(matrix, options)
        if operation is Operation.ADJUST:
            return self.adjustments.apply(matrix, options)
        if operation is Operation.EFFECT:
            return self.effects.apply(matrix, options)
        raise UnknownOperationError(operation.value)
