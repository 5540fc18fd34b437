from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from src.domain.entities.processing import ProcessingOptions
from src.domain.services.processing_service import ProcessingService, round_half_away

logger = logging.getLogger(__name__)


@dataclass
class AdjustmentEngine:
    """Slider-style colour adjustments, 1.0 meaning "no change".

    Contrast and hue rotation are part of the request schema but have no
    effect on the image.
    """

    processing: ProcessingService = field(default_factory=ProcessingService)

    def apply(self, matrix: np.ndarray, options: ProcessingOptions) -> np.ndarray:
        out = matrix

        if options.brightness is not None:
            out = self._brightness(out, float(options.brightness))

        if options.contrast is not None:
            logger.debug("contrast=%s accepted without effect", options.contrast)

        if options.saturation is not None:
            out = self._saturation(out, float(options.saturation))

        if options.hue_rotation is not None:
            logger.debug("hue_rotation=%s accepted without effect", options.hue_rotation)

        return out

    # Brightness: |b - 1| * 50, clamped to [0, 255]
    def _brightness(self, matrix: np.ndarray, brightness: float) -> np.ndarray:
        if brightness > 1.0:
            amount = int(min(max((brightness - 1.0) * 50.0, 0.0), 255.0))
            return self.processing.inc_brightness(matrix, amount)
        if brightness < 1.0:
            amount = int(min(max((1.0 - brightness) * 50.0, 0.0), 255.0))
            return self.processing.dec_brightness(matrix, amount)
        return matrix

    # Saturation: < 0.5 full grayscale, otherwise +/- round(|s - 1| * 30) on red and blue
    def _saturation(self, matrix: np.ndarray, saturation: float) -> np.ndarray:
        if saturation < 0.5:
            return self.processing.grayscale(matrix)
        if saturation < 1.0:
            reduction = round_half_away((1.0 - saturation) * 30.0)
            out = self.processing.alter_red_channel(matrix, -reduction)
            return self.processing.alter_blue_channel(out, -reduction)
        if saturation > 1.0:
            increase = round_half_away((saturation - 1.0) * 30.0)
            out = self.processing.alter_red_channel(matrix, increase)
            return self.processing.alter_blue_channel(out, increase)
        return matrix
