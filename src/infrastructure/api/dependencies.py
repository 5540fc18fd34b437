from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from src.application.use_cases.batch_process_image import BatchProcessImageUseCase
from src.application.use_cases.process_image import ProcessImageUseCase
from src.application.use_cases.validate_image import ValidateImageUseCase
from src.domain.services.transform_engine import TransformEngine
from src.infrastructure.codec.image_codec import ImageCodec
from src.infrastructure.config import Settings, get_settings


def get_app_settings() -> Settings:
    return get_settings()


def get_codec(settings: Annotated[Settings, Depends(get_app_settings)]) -> ImageCodec:
    return ImageCodec(default_quality=settings.default_quality)


def get_process_use_case(
    codec: Annotated[ImageCodec, Depends(get_codec)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ProcessImageUseCase:
    return ProcessImageUseCase(
        codec=codec,
        transforms=TransformEngine(max_dimension=settings.max_dimension),
    )


def get_batch_use_case(
    processor: Annotated[ProcessImageUseCase, Depends(get_process_use_case)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> BatchProcessImageUseCase:
    return BatchProcessImageUseCase(processor=processor, max_workers=settings.batch_workers)


def get_validate_use_case(
    codec: Annotated[ImageCodec, Depends(get_codec)],
) -> ValidateImageUseCase:
    return ValidateImageUseCase(codec=codec)
