from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Sequence

from src.application.use_cases.process_image import ProcessImageUseCase
from src.domain.entities.processing import BatchResult, ProcessingOptions, ProcessingResult

logger = logging.getLogger(__name__)


@dataclass
class BatchProcessImageUseCase:
    """
    Apply the same options to every image of an ordered batch.

    Each image goes through ProcessImageUseCase on its own, so one bad
    input is recorded as a failed result and the rest still run. The
    results list is index-aligned with the inputs whether the batch runs
    sequentially (max_workers=1) or on a thread pool.
    """

    processor: ProcessImageUseCase = field(default_factory=ProcessImageUseCase)
    max_workers: int = 1

    def execute(
        self,
        images: Sequence[str],
        options: ProcessingOptions | dict[str, Any],
    ) -> BatchResult:
        """
        Args:
            images: Encoded images (base64 or data URLs), in caller order
            options: Shared options applied to every image

        Returns:
            BatchResult with processed == successful + failed == len(images)
        """
        started = time.perf_counter()
        results = self._run_all(list(images), options)
        total_time_ms = int((time.perf_counter() - started) * 1000)

        batch = BatchResult.from_results(results, total_time_ms)
        logger.info(
            "Batch complete: %d/%d successful in %d ms",
            batch.successful,
            batch.processed,
            batch.total_time_ms,
        )
        return batch

    def _run_all(
        self, images: list[str], options: ProcessingOptions | dict[str, Any]
    ) -> list[ProcessingResult]:
        if self.max_workers <= 1 or len(images) <= 1:
            return [self._run_one(i, data, options) for i, data in enumerate(images)]

        # map() yields in submission order, so ordering follows the inputs
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(
                pool.map(lambda item: self._run_one(item[0], item[1], options), enumerate(images))
            )

    def _run_one(
        self, index: int, image_data: str, options: ProcessingOptions | dict[str, Any]
    ) -> ProcessingResult:
        result = self.processor.execute(image_data, options)
        if not result.success:
            logger.info("Batch item %d failed: %s", index, result.error)
        return result
