from __future__ import annotations

import base64
from pathlib import PurePath

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from src.application.dtos.batch_processing_dto import BatchProcessRequest, BatchProcessResponse
from src.application.dtos.common_dto import EffectListResponse, ErrorResponse, FilterListResponse
from src.application.dtos.processing_dto import (
    ProcessImageRequest,
    ProcessingOptionsModel,
    ProcessingResultResponse,
    ValidateImageRequest,
    ValidateImageResponse,
)
from src.application.use_cases.batch_process_image import BatchProcessImageUseCase
from src.application.use_cases.process_image import ProcessImageUseCase
from src.application.use_cases.validate_image import ValidateImageUseCase
from src.domain.services.effect_engine import AVAILABLE_EFFECTS
from src.domain.services.filter_engine import AVAILABLE_FILTERS
from src.infrastructure.api.dependencies import (
    get_app_settings,
    get_batch_use_case,
    get_process_use_case,
    get_validate_use_case,
)
from src.infrastructure.codec.image_codec import media_type
from src.infrastructure.config import Settings

router = APIRouter(
    prefix="/processing",
    tags=["Image Processing"],
    responses={
        422: {"description": "Validation Error - Invalid request format"},
    },
)


@router.post(
    "/image",
    response_model=ProcessingResultResponse,
    summary="Process Image",
    description="""
    Decode an image, apply one operation category and re-encode it.

    **Operations** (`options.operation`):
    - `filter` - `options.filter` names a colour filter, `intensity` tunes warm/cool/vintage
    - `transform` - resize (both dimensions), crop (all four crop fields), flips
    - `adjust` - `brightness` and `saturation` (1.0 = no change)
    - `effect` - `options.filter` names a convolution/special effect

    **Output:**
    - `output_as_binary=false` (default): `image_data` is a data URL
    - `output_as_binary=true`: `image_data` is raw base64 and `binary_data` holds the bytes

    Processing failures are reported in the body (`success: false`, `error`),
    not as HTTP errors.
    """,
    response_description="Processing result with image data and metadata",
)
def process_image(
    body: ProcessImageRequest,
    uc: ProcessImageUseCase = Depends(get_process_use_case),
):
    """Run a single image through the pipeline."""
    result = uc.execute(body.image_data, body.options.to_options())
    return result.to_dict()


@router.post(
    "/batch",
    response_model=BatchProcessResponse,
    summary="Batch Process Images",
    description="""
    Apply the same options to several images.

    - Every image is processed independently; one failure never stops the batch
    - `results[i]` always corresponds to `images[i]`
    - `processed == successful + failed`
    """,
    response_description="Aggregated batch outcome with per-image results",
)
def batch_process_images(
    body: BatchProcessRequest,
    uc: BatchProcessImageUseCase = Depends(get_batch_use_case),
    settings: Settings = Depends(get_app_settings),
):
    """Process several images with shared options."""
    if len(body.images) > settings.max_batch_size:
        raise HTTPException(
            status_code=422,
            detail=f"Batch too large: {len(body.images)} images (maximum {settings.max_batch_size})",
        )
    batch = uc.execute(body.images, body.options.to_options())
    return batch.to_dict()


@router.post(
    "/upload",
    summary="Process Uploaded Image File",
    description="""
    Process an image sent as a multipart file instead of a base64 string.

    `options` is a JSON-encoded ProcessingOptions object. When
    `output_as_binary` is true the encoded image is returned directly as the
    response body, otherwise the usual JSON result is returned.
    """,
    responses={
        200: {"description": "Processed image bytes or JSON result"},
        400: {"model": ErrorResponse, "description": "Image could not be processed"},
    },
)
def process_upload(
    file: UploadFile = File(..., description="Image file to process"),
    options: str = Form(..., description="JSON-encoded processing options"),
    uc: ProcessImageUseCase = Depends(get_process_use_case),
):
    """Process an uploaded image file."""
    try:
        opts = ProcessingOptionsModel.model_validate_json(options)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid options: {exc}") from exc

    data = file.file.read()
    processing_options = opts.to_options()
    result = uc.execute(base64.b64encode(data).decode("ascii"), processing_options)
    if not result.success:
        return JSONResponse(status_code=400, content={"error": result.error})

    if processing_options.output_as_binary and result.binary_data is not None:
        fmt = result.metadata.format if result.metadata else "png"
        stem = PurePath(file.filename).stem if file.filename else ""
        filename = f"{stem}-processed.{fmt}" if stem else f"processed.{fmt}"
        return Response(
            content=result.binary_data,
            media_type=media_type(fmt),
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    return result.to_dict()


@router.post(
    "/validate",
    response_model=ValidateImageResponse,
    response_model_exclude_none=True,
    summary="Validate Image",
    description="Decode an image without processing it and report its dimensions.",
)
def validate_image(
    body: ValidateImageRequest,
    uc: ValidateImageUseCase = Depends(get_validate_use_case),
):
    """Check that an encoded image can be decoded."""
    return uc.execute(body.image_data).to_dict()


@router.get(
    "/filters",
    response_model=FilterListResponse,
    summary="List Filters",
    description="Filter names accepted by `operation=filter`.",
)
def list_filters():
    return {"filters": list(AVAILABLE_FILTERS)}


@router.get(
    "/effects",
    response_model=EffectListResponse,
    summary="List Effects",
    description="Effect names accepted by `operation=effect` (passed in `options.filter`).",
)
def list_effects():
    return {"effects": list(AVAILABLE_EFFECTS)}
