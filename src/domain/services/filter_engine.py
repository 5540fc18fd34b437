from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from src.domain.entities.processing import ProcessingOptions
from src.domain.errors import UnknownFilterError
from src.domain.services.processing_service import ProcessingService, round_half_away


class FilterName(str, Enum):
    GRAYSCALE = "grayscale"
    SEPIA = "sepia"
    INVERT = "invert"
    VINTAGE = "vintage"
    NOIR = "noir"
    WARM = "warm"
    COOL = "cool"
    DRAMATIC = "dramatic"
    FIRENZE = "firenze"
    GOLDEN = "golden"
    LIX = "lix"
    LOFI = "lofi"
    NEUE = "neue"
    OBSIDIAN = "obsidian"
    PASTEL_PINK = "pastel_pink"
    RYO = "ryo"


AVAILABLE_FILTERS: tuple[str, ...] = tuple(f.value for f in FilterName)


def parse_filter(name: str | None) -> FilterName:
    # exact, case-sensitive match
    try:
        return FilterName(name)
    except ValueError:
        raise UnknownFilterError(str(name) if name is not None else "none") from None


@dataclass
class FilterEngine:
    """Named colour filters. Composite filters are fixed sequences of primitives:

    - vintage: sepia, then +20 brightness when intensity < 0.5
    - noir: grayscale, then +10 brightness
    - warm: red + round(intensity * 20), blue - round(intensity * 10)
    - cool: blue + round(intensity * 20), red - round(intensity * 10)

    Channel shifts round exact halves away from zero.
    """

    processing: ProcessingService = field(default_factory=ProcessingService)

    def apply(self, matrix: np.ndarray, options: ProcessingOptions) -> np.ndarray:
        name = parse_filter(options.filter)
        intensity = float(options.intensity) if options.intensity is not None else 1.0

        if name is FilterName.VINTAGE:
            out = self.processing.sepia(matrix)
            if intensity < 0.5:
                out = self.processing.inc_brightness(out, 20)
            return out
        if name is FilterName.NOIR:
            out = self.processing.grayscale(matrix)
            return self.processing.inc_brightness(out, 10)
        if name is FilterName.WARM:
            out = self.processing.alter_red_channel(matrix, round_half_away(intensity * 20))
            return self.processing.alter_blue_channel(out, -round_half_away(intensity * 10))
        if name is FilterName.COOL:
            out = self.processing.alter_blue_channel(matrix, round_half_away(intensity * 20))
            return self.processing.alter_red_channel(out, -round_half_away(intensity * 10))
        # single-call presets share their name with the primitive
        return getattr(self.processing, name.value)(matrix)
