import base64
from types import SimpleNamespace

import pytest

from src.application.use_cases.process_image import ProcessImageUseCase
from src.domain.entities.processing import Operation, ProcessingOptions
from src.domain.services.transform_engine import TransformEngine


class _ExplodingEngine:
    def apply(self, matrix, options):
        raise RuntimeError("kaboom")


def _assert_invariant(result):
    if result.success:
        assert result.error is None
        assert result.image_data is not None
        assert result.metadata is not None
    else:
        assert result.error
        assert result.image_data is None
        assert result.metadata is None
        assert result.binary_data is None


def test_identity_round_trip(red_png):
    result = ProcessImageUseCase().execute(red_png, ProcessingOptions(operation="transform"))
    _assert_invariant(result)
    assert result.success
    assert (result.metadata.width, result.metadata.height) == (2, 2)
    assert result.metadata.format == "png"


def test_filter_accepts_dict_options(red_png):
    result = ProcessImageUseCase().execute(red_png, {"operation": "filter", "filter": "grayscale"})
    assert result.success
    assert result.image_data.startswith("data:image/png;base64,")


def test_resize_square_stays_square(red_png):
    opts = ProcessingOptions(
        operation=Operation.TRANSFORM, resize_width=4, resize_height=4, keep_aspect_ratio=True
    )
    result = ProcessImageUseCase().execute(red_png, opts)
    assert (result.metadata.width, result.metadata.height) == (4, 4)


def test_resize_without_aspect_ratio(make_image):
    opts = ProcessingOptions(
        operation="transform", resize_width=4, resize_height=4, keep_aspect_ratio=False
    )
    result = ProcessImageUseCase().execute(make_image(7, 2), opts)
    assert (result.metadata.width, result.metadata.height) == (4, 4)


def test_metadata_reflects_final_buffer(make_image):
    opts = ProcessingOptions(
        operation="transform", crop_x=1, crop_y=0, crop_width=3, crop_height=2
    )
    result = ProcessImageUseCase().execute(make_image(6, 6), opts)
    assert (result.metadata.width, result.metadata.height) == (3, 2)


def test_partial_crop_is_ignored(red_png):
    opts = ProcessingOptions(operation="transform", crop_x=1, crop_y=1)
    result = ProcessImageUseCase().execute(red_png, opts)
    assert result.success
    assert (result.metadata.width, result.metadata.height) == (2, 2)


@pytest.mark.parametrize(
    "extra", [{}, {"resize_width": 4, "resize_height": 4}, {"flip_vertical": True}]
)
def test_rotation_always_fails(red_png, extra):
    opts = ProcessingOptions(operation="transform", rotation_angle=90, **extra)
    result = ProcessImageUseCase().execute(red_png, opts)
    _assert_invariant(result)
    assert not result.success
    assert "not yet implemented" in result.error


def test_unknown_filter_names_offender(red_png):
    result = ProcessImageUseCase().execute(
        red_png, ProcessingOptions(operation="filter", filter="not_a_filter")
    )
    assert not result.success
    assert "not_a_filter" in result.error


def test_unknown_operation_names_offender(red_png):
    result = ProcessImageUseCase().execute(red_png, ProcessingOptions(operation="rotate"))
    assert not result.success
    assert "rotate" in result.error


def test_missing_operation(red_png):
    result = ProcessImageUseCase().execute(red_png, {"filter": "sepia"})
    assert not result.success


def test_binary_output(red_png):
    opts = ProcessingOptions(operation="filter", filter="sepia", output_as_binary=True)
    result = ProcessImageUseCase().execute(red_png, opts)
    _assert_invariant(result)
    assert result.binary_data is not None
    assert not result.image_data.startswith("data:")
    assert base64.b64decode(result.image_data) == result.binary_data
    assert result.metadata.size_bytes == len(result.binary_data)


@pytest.mark.parametrize("flag", [False, None])
def test_data_url_output(red_png, flag):
    opts = ProcessingOptions(operation="filter", filter="sepia", output_as_binary=flag)
    result = ProcessImageUseCase().execute(red_png, opts)
    assert result.image_data.startswith("data:image/png;base64,")
    assert result.binary_data is None


@pytest.mark.parametrize("fmt, prefix", [("jpeg", b"\xff\xd8"), ("webp", b"RIFF")])
def test_output_formats(red_png, fmt, prefix):
    opts = ProcessingOptions(
        operation="adjust", brightness=1.2, output_format=fmt, quality=70, output_as_binary=True
    )
    result = ProcessImageUseCase().execute(red_png, opts)
    assert result.success
    assert result.binary_data.startswith(prefix)
    assert result.metadata.format == fmt


def test_unsupported_output_format(red_png):
    opts = ProcessingOptions(operation="filter", filter="sepia", output_format="gif")
    result = ProcessImageUseCase().execute(red_png, opts)
    assert not result.success
    assert "gif" in result.error


@pytest.mark.parametrize("operation", ["filter", "transform", "adjust", "effect", "bogus"])
def test_invalid_input_fails_for_any_operation(operation):
    opts = ProcessingOptions(operation=operation, filter="grayscale")
    result = ProcessImageUseCase().execute("invalid_base64_data", opts)
    _assert_invariant(result)
    assert not result.success


def test_effect_uses_filter_field(red_png):
    result = ProcessImageUseCase().execute(
        red_png, ProcessingOptions(operation="effect", filter="edge_detection")
    )
    assert result.success


def test_unexpected_fault_is_contained(red_png):
    uc = ProcessImageUseCase(filters=_ExplodingEngine())
    result = uc.execute(red_png, ProcessingOptions(operation="filter", filter="sepia"))
    _assert_invariant(result)
    assert result.error.startswith("Internal error")
    assert "kaboom" in result.error


def test_to_dict_shape(red_png):
    opts = ProcessingOptions(operation="filter", filter="invert", output_as_binary=True)
    data = ProcessImageUseCase().execute(red_png, opts).to_dict()
    assert set(data) == {"success", "image_data", "binary_data", "metadata", "error"}
    assert isinstance(data["binary_data"], list)
    assert all(0 <= b <= 255 for b in data["binary_data"])
    assert data["metadata"]["width"] == 2


def test_unhandled_operation_member_fails(red_png, monkeypatch):
    monkeypatch.setattr(Operation, "parse", classmethod(lambda cls, value: SimpleNamespace(value="mystery")))
    result = ProcessImageUseCase().execute(red_png, ProcessingOptions(operation="effect", filter="blur"))
    _assert_invariant(result)
    assert "mystery" in result.error


def test_resize_limit_reported_as_failure(red_png):
    uc = ProcessImageUseCase(transforms=TransformEngine(max_dimension=64))
    opts = ProcessingOptions(operation="transform", resize_width=100_000, resize_height=100_000)
    result = uc.execute(red_png, opts)
    _assert_invariant(result)
    assert "maximum dimension" in result.error
