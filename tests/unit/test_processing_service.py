import numpy as np
import pytest

from src.domain.services.processing_service import KERNELS
from src.domain.services.processing_service import ProcessingService as PS


def test_brightness_clip(rgba):
    img = rgba(color=(0, 128, 250, 255))
    out = PS.inc_brightness(img, 20)
    assert out.dtype == np.uint8
    assert tuple(out[0, 0]) == (20, 148, 255, 255)

    out = PS.dec_brightness(img, 20)
    assert tuple(out[0, 0]) == (0, 108, 230, 255)


def test_invert_keeps_alpha(rgba):
    img = rgba(color=(0, 64, 255, 128))
    out = PS.invert(img)
    assert tuple(out[0, 0]) == (255, 191, 0, 128)


def test_grayscale_average(rgba):
    out = PS.grayscale(rgba(color=(255, 0, 0, 255)))
    assert tuple(out[1, 1]) == (85, 85, 85, 255)


def test_sepia_tints_toward_red(rgba):
    out = PS.sepia(rgba(color=(255, 0, 0, 255)))
    r, g, b, a = (int(v) for v in out[0, 0])
    assert (r, g, b, a) == (176, 126, 76, 255)


def test_primitives_do_not_mutate_input(rgba):
    img = rgba(color=(10, 20, 30, 255))
    before = img.copy()
    PS.invert(img)
    PS.inc_brightness(img, 50)
    PS.alter_channel(img, 0, 40)
    assert np.array_equal(img, before)


def test_alter_channel_signed(rgba):
    img = rgba(color=(100, 100, 100, 255))
    assert tuple(PS.alter_red_channel(img, -150)[0, 0]) == (0, 100, 100, 255)
    assert tuple(PS.alter_blue_channel(img, 30)[0, 0]) == (100, 100, 130, 255)
    with pytest.raises(ValueError):
        PS.alter_channel(img, 3, 10)


def test_threshold_is_binary(rgba):
    img = np.concatenate([rgba(1, 1, (200, 200, 200, 255)), rgba(1, 1, (50, 50, 50, 255))], axis=1)
    out = PS.threshold(img, 127)
    assert tuple(out[0, 0]) == (255, 255, 255, 255)
    assert tuple(out[0, 1]) == (0, 0, 0, 255)


def test_solarize_red_channel(rgba):
    assert PS.solarize(rgba(color=(50, 10, 10, 255)))[0, 0, 0] == 150
    assert PS.solarize(rgba(color=(250, 10, 10, 255)))[0, 0, 0] == 250
    assert PS.solarize(rgba(color=(200, 10, 10, 255)))[0, 0, 0] == 200


@pytest.mark.parametrize("name, expected", [("edge_detection", 0), ("emboss", 90), ("sharpen", 90)])
def test_convolution_on_flat_image(rgba, name, expected):
    out = PS.convolve(rgba(4, 4, (90, 90, 90, 255)), KERNELS[name])
    assert np.all(out[..., :3] == expected)
    assert np.all(out[..., 3] == 255)


def test_gaussian_blur_keeps_flat_image(rgba):
    img = rgba(6, 5, (40, 80, 120, 200))
    out = PS.gaussian_blur(img, 2)
    assert np.array_equal(out, img)


def test_gaussian_blur_smooths_edge():
    img = np.zeros((1, 8, 4), dtype=np.uint8)
    img[..., 3] = 255
    img[:, 4:, :3] = 255
    out = PS.gaussian_blur(img, 2)
    assert 0 < out[0, 3, 0] < 255
    assert 0 < out[0, 4, 0] < 255


def test_resize_nearest_shape(rgba):
    out = PS.resize(rgba(2, 2), 5, 3)
    assert out.shape == (3, 5, 4)


def test_crop_and_flip():
    img = np.zeros((2, 3, 4), dtype=np.uint8)
    img[0, 0] = (255, 0, 0, 255)
    img[1, 2] = (0, 0, 255, 255)
    assert PS.crop(img, 1, 0, 2, 2).shape == (2, 2, 4)
    assert tuple(PS.flip_horizontal(img)[0, 2]) == (255, 0, 0, 255)
    assert tuple(PS.flip_vertical(img)[0, 2]) == (0, 0, 255, 255)


@pytest.mark.parametrize(
    "preset",
    ["dramatic", "firenze", "golden", "lix", "lofi", "neue", "obsidian", "pastel_pink", "ryo"],
)
def test_presets_keep_shape_and_alpha(rgba, preset):
    img = rgba(3, 2, (120, 60, 30, 77))
    out = getattr(PS, preset)(img)
    assert out.shape == img.shape
    assert out.dtype == np.uint8
    assert np.all(out[..., 3] == 77)
