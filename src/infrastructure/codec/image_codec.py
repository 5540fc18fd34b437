from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from io import BytesIO

import numpy as np
from PIL import Image, UnidentifiedImageError

from src.domain.errors import DecodeError, EncodeError, UnsupportedOutputFormatError

DEFAULT_FORMAT = "png"
DEFAULT_JPEG_QUALITY = 85

# request format -> Pillow format
SUPPORTED_FORMATS: dict[str, str] = {
    "png": "PNG",
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "webp": "WEBP",
}


def normalize_format(fmt: str | None) -> str:
    """Lower-case a requested output format, raising if it is not supported."""
    name = (fmt or DEFAULT_FORMAT).strip().lower()
    if name not in SUPPORTED_FORMATS:
        raise UnsupportedOutputFormatError(fmt or "")
    return name


def strip_data_url(data: str) -> str:
    """Drop a `data:<mime>;base64,` prefix if present."""
    if data.startswith("data:"):
        _, sep, payload = data.partition(",")
        if sep:
            return payload
    return data


def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def to_data_url(data: bytes, fmt: str) -> str:
    return f"data:image/{fmt};base64,{to_base64(data)}"


def media_type(fmt: str) -> str:
    """Registered MIME type for an output format (`jpg` -> `image/jpeg`)."""
    name = normalize_format(fmt)
    # plugins such as WebP register their MIME type on init
    Image.init()
    return Image.MIME.get(SUPPORTED_FORMATS[name], f"image/{name}")


@dataclass
class ImageCodec:
    """Converts between base64 / data-URL encoded images and uint8 RGBA arrays.

    Pillow does the container work (format auto-detection on decode, PNG /
    JPEG / WebP on encode).
    """

    default_quality: int = DEFAULT_JPEG_QUALITY

    def decode_base64(self, data: str) -> bytes:
        payload = "".join(strip_data_url(data).split())
        if not payload:
            raise DecodeError("Empty base64 input provided")
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"Failed to decode base64: {exc}") from exc

    def decode_bytes(self, data: bytes) -> np.ndarray:
        try:
            img = Image.open(BytesIO(data))
            img.load()
            rgba = img.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            raise DecodeError(f"Failed to load image: {exc}") from exc
        return np.asarray(rgba, dtype=np.uint8).copy()

    def decode(self, data: str) -> np.ndarray:
        return self.decode_bytes(self.decode_base64(data))

    def encode(self, matrix: np.ndarray, fmt: str | None = None, quality: int | None = None) -> bytes:
        name = normalize_format(fmt)
        pil_format = SUPPORTED_FORMATS[name]
        arr = np.ascontiguousarray(matrix, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise EncodeError(f"Expected an RGBA buffer, got shape {arr.shape}")
        img = Image.fromarray(arr)

        buf = BytesIO()
        try:
            if pil_format == "JPEG":
                # JPEG has no alpha channel
                q = self.default_quality if quality is None else int(quality)
                img.convert("RGB").save(buf, format="JPEG", quality=min(max(q, 1), 100))
            elif pil_format == "WEBP":
                img.save(buf, format="WEBP", lossless=True)
            else:
                img.save(buf, format="PNG")
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"{name.upper()} encoding failed: {exc}") from exc
        return buf.getvalue()
