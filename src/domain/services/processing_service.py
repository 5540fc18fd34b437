from __future__ import annotations

import math

import numpy as np

# 3x3 kernels, row-major
KERNELS: dict[str, np.ndarray] = {
    "edge_detection": np.array([[-1, -1, -1], [-1, 8, -1], [-1, -1, -1]], dtype=np.float32),
    "emboss": np.array([[-2, -1, 0], [-1, 1, 1], [0, 1, 2]], dtype=np.float32),
    "laplace": np.array([[0, -1, 0], [-1, 4, -1], [0, -1, 0]], dtype=np.float32),
    "sobel_horizontal": np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float32),
    "sobel_vertical": np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float32),
    "sharpen": np.array([[0, -1, 0], [-1, 5, -1], [0, -1, 0]], dtype=np.float32),
}


def round_half_away(value: float) -> int:
    """Round to the nearest integer, exact halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = int(math.floor(abs(value) + 0.5))
    return -magnitude if value < 0 else magnitude


class ProcessingService:
    """Pure NumPy pixel primitives. Inputs and outputs are uint8 RGBA arrays.

    Channel convention:
    - RGBA: (H, W, 4), alpha is carried through untouched by colour operations.

    Every primitive returns a new array and never mutates its input.
    """

    # --------- colour ---------

    # Grayscale (Average): (R + G + B) / 3
    @staticmethod
    def grayscale(matrix: np.ndarray) -> np.ndarray:
        out = matrix.copy()
        avg = matrix[..., :3].astype(np.uint16).sum(axis=2) // 3
        out[..., :3] = avg.astype(np.uint8)[..., None]
        return out

    # Sepia: luma L = 0.3R + 0.59G + 0.11B, then (L + 100, L + 50, L)
    @staticmethod
    def sepia(matrix: np.ndarray) -> np.ndarray:
        out = matrix.copy()
        rgb = matrix[..., :3].astype(np.float32)
        luma = 0.3 * rgb[..., 0] + 0.59 * rgb[..., 1] + 0.11 * rgb[..., 2]
        out[..., 0] = np.clip(luma + 100.0, 0, 255).astype(np.uint8)
        out[..., 1] = np.clip(luma + 50.0, 0, 255).astype(np.uint8)
        out[..., 2] = np.clip(luma, 0, 255).astype(np.uint8)
        return out

    # Invert: I_out = 255 - I_in
    @staticmethod
    def invert(matrix: np.ndarray) -> np.ndarray:
        out = matrix.copy()
        out[..., :3] = 255 - matrix[..., :3]
        return out

    # Brightness: I_out = min(I_in + amount, 255)
    @staticmethod
    def inc_brightness(matrix: np.ndarray, amount: int) -> np.ndarray:
        out = matrix.copy()
        out[..., :3] = np.clip(matrix[..., :3].astype(np.int16) + int(amount), 0, 255)
        return out

    # Brightness: I_out = max(I_in - amount, 0)
    @staticmethod
    def dec_brightness(matrix: np.ndarray, amount: int) -> np.ndarray:
        out = matrix.copy()
        out[..., :3] = np.clip(matrix[..., :3].astype(np.int16) - int(amount), 0, 255)
        return out

    # Channel shift: C_out = clip(C_in + amount), amount may be negative
    @staticmethod
    def alter_channel(matrix: np.ndarray, channel: int, amount: int) -> np.ndarray:
        if channel not in (0, 1, 2):
            raise ValueError("channel must be 0 (red), 1 (green) or 2 (blue)")
        out = matrix.copy()
        out[..., channel] = np.clip(matrix[..., channel].astype(np.int16) + int(amount), 0, 255)
        return out

    @staticmethod
    def alter_red_channel(matrix: np.ndarray, amount: int) -> np.ndarray:
        return ProcessingService.alter_channel(matrix, 0, amount)

    @staticmethod
    def alter_blue_channel(matrix: np.ndarray, amount: int) -> np.ndarray:
        return ProcessingService.alter_channel(matrix, 2, amount)

    # Contrast: f = 259(c + 255) / (255(259 - c)), I_out = f(I_in - 128) + 128
    @staticmethod
    def adjust_contrast(matrix: np.ndarray, contrast: float) -> np.ndarray:
        c = float(np.clip(contrast, -255.0, 255.0))
        factor = (259.0 * (c + 255.0)) / (255.0 * (259.0 - c))
        out = matrix.copy()
        rgb = matrix[..., :3].astype(np.float32)
        out[..., :3] = np.clip(factor * (rgb - 128.0) + 128.0, 0, 255).astype(np.uint8)
        return out

    # Overlay: I_out = (1 - a) * I_in + a * colour
    @staticmethod
    def color_overlay(matrix: np.ndarray, color: tuple[int, int, int], opacity: float) -> np.ndarray:
        a = float(np.clip(opacity, 0.0, 1.0))
        out = matrix.copy()
        rgb = matrix[..., :3].astype(np.float32)
        tint = np.array(color, dtype=np.float32)
        out[..., :3] = np.clip((1.0 - a) * rgb + a * tint, 0, 255).astype(np.uint8)
        return out

    # Saturation: push each channel away from the pixel average by `factor`
    @staticmethod
    def saturate(matrix: np.ndarray, factor: float) -> np.ndarray:
        out = matrix.copy()
        rgb = matrix[..., :3].astype(np.float32)
        mean = rgb.mean(axis=2, keepdims=True)
        out[..., :3] = np.clip(mean + (rgb - mean) * float(factor), 0, 255).astype(np.uint8)
        return out

    # Invert a subset of channels (used by the lix / neue / ryo presets)
    @staticmethod
    def invert_channels(matrix: np.ndarray, channels: tuple[int, ...]) -> np.ndarray:
        out = matrix.copy()
        for c in channels:
            out[..., c] = 255 - matrix[..., c]
        return out

    # Threshold on weighted luma: 255 if L >= t else 0
    @staticmethod
    def threshold(matrix: np.ndarray, value: int) -> np.ndarray:
        out = matrix.copy()
        rgb = matrix[..., :3].astype(np.float32)
        luma = 0.3 * rgb[..., 0] + 0.59 * rgb[..., 1] + 0.11 * rgb[..., 2]
        binary = np.where(luma >= float(value), 255, 0).astype(np.uint8)
        out[..., :3] = binary[..., None]
        return out

    # Solarize (red channel): R_out = 200 - R where that is positive
    @staticmethod
    def solarize(matrix: np.ndarray) -> np.ndarray:
        out = matrix.copy()
        red = matrix[..., 0].astype(np.int16)
        out[..., 0] = np.where(200 - red > 0, 200 - red, red).astype(np.uint8)
        return out

    # --------- preset filters ---------

    @staticmethod
    def dramatic(matrix: np.ndarray) -> np.ndarray:
        return ProcessingService.adjust_contrast(ProcessingService.grayscale(matrix), 60)

    @staticmethod
    def firenze(matrix: np.ndarray) -> np.ndarray:
        out = ProcessingService.color_overlay(matrix, (255, 47, 78), 0.2)
        return ProcessingService.inc_brightness(out, 30)

    @staticmethod
    def golden(matrix: np.ndarray) -> np.ndarray:
        out = ProcessingService.color_overlay(matrix, (255, 215, 0), 0.2)
        return ProcessingService.adjust_contrast(out, 30)

    @staticmethod
    def lix(matrix: np.ndarray) -> np.ndarray:
        return ProcessingService.invert_channels(matrix, (0, 1))

    @staticmethod
    def lofi(matrix: np.ndarray) -> np.ndarray:
        out = ProcessingService.adjust_contrast(matrix, 30)
        return ProcessingService.saturate(out, 1.2)

    @staticmethod
    def neue(matrix: np.ndarray) -> np.ndarray:
        return ProcessingService.invert_channels(matrix, (2,))

    @staticmethod
    def obsidian(matrix: np.ndarray) -> np.ndarray:
        return ProcessingService.adjust_contrast(ProcessingService.grayscale(matrix), 25)

    @staticmethod
    def pastel_pink(matrix: np.ndarray) -> np.ndarray:
        out = ProcessingService.color_overlay(matrix, (220, 112, 170), 0.1)
        return ProcessingService.adjust_contrast(out, 30)

    @staticmethod
    def ryo(matrix: np.ndarray) -> np.ndarray:
        return ProcessingService.invert_channels(matrix, (0, 2))

    # --------- convolution ---------

    # 3x3 convolution on RGB with edge replication at the borders
    @staticmethod
    def convolve(matrix: np.ndarray, kernel: np.ndarray) -> np.ndarray:
        k = np.asarray(kernel, dtype=np.float32)
        if k.shape != (3, 3):
            raise ValueError("kernel must be 3x3")
        h, w = matrix.shape[:2]
        rgb = np.pad(matrix[..., :3].astype(np.float32), ((1, 1), (1, 1), (0, 0)), mode="edge")
        acc = np.zeros((h, w, 3), dtype=np.float32)
        for dy in range(3):
            for dx in range(3):
                acc += k[dy, dx] * rgb[dy : dy + h, dx : dx + w]
        out = matrix.copy()
        out[..., :3] = np.clip(acc, 0, 255).astype(np.uint8)
        return out

    # Separable gaussian with sigma = radius, kernel spans [-2r, 2r]
    @staticmethod
    def gaussian_blur(matrix: np.ndarray, radius: int) -> np.ndarray:
        radius = int(radius)
        if radius <= 0:
            raise ValueError("radius must be > 0")
        span = 2 * radius
        xs = np.arange(-span, span + 1, dtype=np.float32)
        weights = np.exp(-(xs**2) / (2.0 * radius * radius))
        weights /= weights.sum()

        h, w = matrix.shape[:2]
        rgb = matrix[..., :3].astype(np.float32)
        padded = np.pad(rgb, ((0, 0), (span, span), (0, 0)), mode="edge")
        horiz = sum(wt * padded[:, i : i + w] for i, wt in enumerate(weights))
        padded = np.pad(horiz, ((span, span), (0, 0), (0, 0)), mode="edge")
        vert = sum(wt * padded[i : i + h] for i, wt in enumerate(weights))

        out = matrix.copy()
        out[..., :3] = np.clip(np.rint(vert), 0, 255).astype(np.uint8)
        return out

    # --------- geometry ---------

    # Nearest-neighbour resize to (height, width)
    @staticmethod
    def resize(matrix: np.ndarray, width: int, height: int) -> np.ndarray:
        th, tw = int(height), int(width)
        if th <= 0 or tw <= 0:
            raise ValueError("target size must be > 0")
        h, w = matrix.shape[:2]
        if h == th and w == tw:
            return matrix.copy()
        # create index grid mapping target->source
        ys = (np.arange(th) * (h / th)).astype(np.int64)
        xs = (np.arange(tw) * (w / tw)).astype(np.int64)
        ys = np.clip(ys, 0, h - 1)
        xs = np.clip(xs, 0, w - 1)
        return matrix[ys[:, None], xs[None, :], :].copy()

    # Crop region [y:y+height, x:x+width]
    @staticmethod
    def crop(matrix: np.ndarray, x: int, y: int, width: int, height: int) -> np.ndarray:
        return matrix[y : y + height, x : x + width].copy()

    @staticmethod
    def flip_horizontal(matrix: np.ndarray) -> np.ndarray:
        return matrix[:, ::-1].copy()

    @staticmethod
    def flip_vertical(matrix: np.ndarray) -> np.ndarray:
        return matrix[::-1].copy()
