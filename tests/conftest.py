import base64
import io
import os
import sys
from pathlib import Path

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Ensure project root is on sys.path so 'src' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")


def _png_b64(w: int, h: int, color: tuple[int, int, int, int]) -> str:
    arr = np.zeros((h, w, 4), dtype=np.uint8)
    arr[:, :] = color
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture()
def make_image():
    """Factory: make_image(w, h, color, data_url=True) -> encoded PNG string."""

    def _make(w=2, h=2, color=(255, 0, 0, 255), data_url=True) -> str:
        payload = _png_b64(w, h, color)
        return f"data:image/png;base64,{payload}" if data_url else payload

    return _make


@pytest.fixture()
def red_png(make_image) -> str:
    # 2x2 opaque red, as a data URL
    return make_image()


@pytest.fixture()
def rgba():
    """Factory for uint8 RGBA buffers filled with one colour."""

    def _make(w=2, h=2, color=(100, 100, 100, 255)) -> np.ndarray:
        arr = np.zeros((h, w, 4), dtype=np.uint8)
        arr[:, :] = color
        return arr

    return _make


@pytest.fixture(scope="session")
def client() -> TestClient:
    # lazy import after env configured
    from src.main import create_app

    app = create_app()
    return TestClient(app)
