from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from src.domain.entities.processing import ProcessingOptions
from src.domain.errors import UnknownEffectError
from src.domain.services.processing_service import KERNELS, ProcessingService


class EffectName(str, Enum):
    EDGE_DETECTION = "edge_detection"
    EMBOSS = "emboss"
    LAPLACE = "laplace"
    SOBEL_HORIZONTAL = "sobel_horizontal"
    SOBEL_VERTICAL = "sobel_vertical"
    BLUR = "blur"
    SHARPEN = "sharpen"
    THRESHOLD = "threshold"
    SOLARIZE = "solarize"
    POSTERIZE = "posterize"


AVAILABLE_EFFECTS: tuple[str, ...] = tuple(e.value for e in EffectName)

BLUR_RADIUS = 2


def parse_effect(name: str | None) -> EffectName:
    try:
        return EffectName(name)
    except ValueError:
        raise UnknownEffectError(str(name) if name is not None else "none") from None


@dataclass
class EffectEngine:
    """Convolution and special effects, selected through `options.filter`."""

    processing: ProcessingService = field(default_factory=ProcessingService)

    def apply(self, matrix: np.ndarray, options: ProcessingOptions) -> np.ndarray:
        effect = parse_effect(options.filter)

        if effect.value in KERNELS:
            return self.processing.convolve(matrix, KERNELS[effect.value])
        if effect is EffectName.BLUR:
            # fixed radius, intensity is ignored
            return self.processing.gaussian_blur(matrix, BLUR_RADIUS)
        if effect is EffectName.THRESHOLD:
            intensity = float(options.intensity) if options.intensity is not None else 0.5
            return self.processing.threshold(matrix, int(intensity * 255.0))
        if effect is EffectName.SOLARIZE:
            return self.processing.solarize(matrix)
        if effect is EffectName.POSTERIZE:
            # approximated by a fixed brightness lift
            return self.processing.inc_brightness(matrix, 20)
        raise UnknownEffectError(effect.value)
