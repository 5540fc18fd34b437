from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from src.domain.entities.processing import ProcessingOptions
from src.domain.errors import OperationNotImplementedError, TransformError
from src.domain.services.processing_service import ProcessingService

MAX_DIMENSION = 10000


def compute_resize_dimensions(
    original_width: int,
    original_height: int,
    requested_width: int,
    requested_height: int,
    keep_aspect_ratio: bool = True,
    max_dimension: int = MAX_DIMENSION,
) -> tuple[int, int]:
    """Return the (width, height) a resize request produces.

    With aspect ratio preservation the result is the largest box of the
    original ratio that fits the requested box. Dimensions are truncated,
    never rounded, and never drop below one pixel. Requests larger than
    `max_dimension` on either axis are rejected.
    """
    if requested_width <= 0 or requested_height <= 0:
        raise TransformError("Resize dimensions must be positive")
    if requested_width > max_dimension or requested_height > max_dimension:
        raise TransformError(
            f"Resize {requested_width}x{requested_height} exceeds the maximum dimension {max_dimension}"
        )
    if not keep_aspect_ratio:
        return int(requested_width), int(requested_height)

    aspect_ratio = original_width / original_height
    if requested_width / requested_height > aspect_ratio:
        new_width = requested_height * aspect_ratio
        new_height = float(requested_height)
    else:
        new_width = float(requested_width)
        new_height = requested_width / aspect_ratio
    return max(1, int(new_width)), max(1, int(new_height))


@dataclass
class TransformEngine:
    """Resize, crop and flip. Steps run in a fixed order:
    resize -> crop -> rotation check -> horizontal flip -> vertical flip.
    """

    processing: ProcessingService = field(default_factory=ProcessingService)
    max_dimension: int = MAX_DIMENSION

    def apply(self, matrix: np.ndarray, options: ProcessingOptions) -> np.ndarray:
        out = matrix

        # resize needs both dimensions
        if options.resize_width is not None and options.resize_height is not None:
            h, w = out.shape[:2]
            keep = options.keep_aspect_ratio if options.keep_aspect_ratio is not None else True
            new_w, new_h = compute_resize_dimensions(
                w,
                h,
                int(options.resize_width),
                int(options.resize_height),
                keep,
                max_dimension=self.max_dimension,
            )
            out = self.processing.resize(out, new_w, new_h)

        # crop needs all four; a partial set is ignored
        crop = (options.crop_x, options.crop_y, options.crop_width, options.crop_height)
        if all(v is not None for v in crop):
            out = self._crop(out, *(int(v) for v in crop))

        if options.rotation_angle is not None:
            raise OperationNotImplementedError("Rotation feature not yet implemented")

        if options.flip_horizontal:
            out = self.processing.flip_horizontal(out)
        if options.flip_vertical:
            out = self.processing.flip_vertical(out)
        return out

    def _crop(self, matrix: np.ndarray, x: int, y: int, width: int, height: int) -> np.ndarray:
        h, w = matrix.shape[:2]
        if x < 0 or y < 0 or width <= 0 or height <= 0:
            raise TransformError("Crop origin must be non-negative and size positive")
        # clamp to image bounds
        x_end = min(x + width, w)
        y_end = min(y + height, h)
        if x >= x_end or y >= y_end:
            raise TransformError(
                f"Crop region ({x}, {y}, {width}x{height}) lies outside the {w}x{h} image"
            )
        return self.processing.crop(matrix, x, y, x_end - x, y_end - y)
