from __future__ import annotations


class ImageProcessingError(ValueError):
    """Base class for failures that end up as a failed ProcessingResult."""


class DecodeError(ImageProcessingError):
    pass


class UnsupportedOutputFormatError(ImageProcessingError):
    def __init__(self, fmt: str) -> None:
        super().__init__(f"Unsupported output format: {fmt}")
        self.format = fmt


class UnknownOperationError(ImageProcessingError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"Unknown operation: {operation}")
        self.operation = operation


class UnknownFilterError(ImageProcessingError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown filter: {name}")
        self.name = name


class UnknownEffectError(ImageProcessingError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown effect: {name}")
        self.name = name


class OperationNotImplementedError(ImageProcessingError):
    pass


class TransformError(ImageProcessingError):
    pass


class EncodeError(ImageProcessingError):
    pass
