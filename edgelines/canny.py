"""Canny-style edge detection stages operating on numpy arrays."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import numpy as np

GAUSSIAN_KERNEL = np.array(
    [
        [1, 4, 7, 4, 1],
        [4, 16, 26, 16, 4],
        [7, 26, 41, 26, 7],
        [4, 16, 26, 16, 4],
        [1, 4, 7, 4, 1],
    ],
    dtype=np.float32,
) / np.float32(273.0)

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float32)
SOBEL_Y = np.array([[1, 2, 1], [0, 0, 0], [-1, -2, -1]], dtype=np.float32)

STRONG = 255
WEAK = 128

_HIGH_FRACTION = np.float32(0.95)
_LOW_RATIO = np.float32(0.4)
_MAGNITUDE_SCALE = 255.0 / 1024.0
_NEIGHBOURS = [(-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]


@dataclass(frozen=True)
class GradientData:
    """Per-pixel gradient magnitude and direction (radians)."""

    magnitude: np.ndarray
    direction: np.ndarray


def _to_uint8(values: np.ndarray) -> np.ndarray:
    """Round to nearest (ties to even) and saturate into 0..255."""
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def rgb_to_grayscale(image) -> np.ndarray:
    """Average the three colour channels of an H x W x 3 image."""
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise ValueError("expected an image of shape (height, width, 3)")
    total = pixels[..., :3].astype(np.uint16).sum(axis=2)
    return (total // 3).astype(np.uint8)


def apply_kernel(source, kernel) -> np.ndarray:
    """Correlate a 2-D image with a square kernel, replicating border pixels."""
    image = np.asarray(source, dtype=np.float32)
    weights = np.asarray(kernel, dtype=np.float32)
    if image.ndim != 2 or image.size == 0:
        raise ValueError("source must be a non-empty 2-D array")
    if weights.ndim != 2 or weights.shape[0] != weights.shape[1] or weights.size == 0:
        raise ValueError("kernel must be a non-empty square 2-D array")

    size = weights.shape[0]
    center = size // 2
    rows, cols = image.shape
    padded = np.pad(image, ((center, size - 1 - center), (center, size - 1 - center)), mode="edge")

    result = np.zeros((rows, cols), dtype=np.float32)
    for (ki, kj), weight in np.ndenumerate(weights):
        result += padded[ki : ki + rows, kj : kj + cols] * weight
    return result


def gaussian_blur(source) -> np.ndarray:
    """Smooth an 8-bit image with a normalised 5 x 5 Gaussian kernel."""
    blurred = apply_kernel(np.asarray(source, dtype=np.float32), GAUSSIAN_KERNEL)
    return _to_uint8(blurred)


def high_pass_filter(source) -> GradientData:
    """Compute Sobel gradient magnitude and direction."""
    image = np.asarray(source, dtype=np.float32)
    grad_x = apply_kernel(image, SOBEL_X)
    grad_y = apply_kernel(image, SOBEL_Y)
    magnitude = np.sqrt(grad_x * grad_x + grad_y * grad_y).astype(np.float32)
    direction = np.arctan2(grad_y, grad_x).astype(np.float32)
    return GradientData(magnitude=magnitude, direction=direction)


def non_max_suppression(grad: GradientData) -> np.ndarray:
    """Keep only pixels that are local maxima along their gradient direction."""
    magnitude = np.asarray(grad.magnitude, dtype=np.float32)
    direction = np.asarray(grad.direction, dtype=np.float32)
    if magnitude.shape != direction.shape or magnitude.ndim != 2:
        raise ValueError("magnitude and direction must be 2-D arrays of the same shape")

    rows, cols = magnitude.shape
    suppressed = np.zeros((rows, cols), dtype=np.float32)
    if rows < 3 or cols < 3:
        return suppressed

    def shifted(di: int, dj: int) -> np.ndarray:
        return magnitude[1 + di : rows - 1 + di, 1 + dj : cols - 1 + dj]

    angle = (direction[1:-1, 1:-1].astype(np.float64) * 180.0 / np.pi).astype(np.float32)
    angle = np.where(angle < 0, angle + np.float32(180.0), angle)

    horizontal = (angle < 22.5) | (angle >= 157.5)
    rising = (angle >= 22.5) & (angle < 67.5)
    vertical = (angle >= 67.5) & (angle < 112.5)
    falling = (angle >= 112.5) & (angle < 157.5)
    masks = [horizontal, rising, vertical, falling]

    first = np.select(masks, [shifted(0, -1), shifted(-1, 1), shifted(-1, 0), shifted(-1, -1)], default=0)
    second = np.select(masks, [shifted(0, 1), shifted(1, -1), shifted(1, 0), shifted(1, 1)], default=0)

    center = shifted(0, 0)
    keep = (center >= first) & (center >= second)
    suppressed[1:-1, 1:-1] = np.where(keep, center, np.float32(0))
    return suppressed


def hysteresis_thresholding(magnitude) -> np.ndarray:
    """Turn suppressed gradient magnitudes into a binary 0/255 edge map.

    The high threshold keeps the strongest 5% of non-zero interior responses;
    the low threshold is 40% of it. Weak pixels survive only when 8-connected
    to a strong one.
    """
    values = np.asarray(magnitude, dtype=np.float32)
    if values.ndim != 2:
        raise ValueError("magnitude must be a 2-D array")

    rows, cols = values.shape
    edges = np.zeros((rows, cols), dtype=np.uint8)
    if rows < 3 or cols < 3:
        return edges

    norm = _to_uint8(values.astype(np.float64) * _MAGNITUDE_SCALE)
    inner = norm[1:-1, 1:-1]

    hist = np.bincount(inner[inner > 0].ravel(), minlength=256)
    limit = np.float32(int(hist.sum())) * _HIGH_FRACTION
    reached = np.nonzero(np.cumsum(hist) >= limit)[0]
    high = int(reached[0]) if reached.size else 0
    low = int(_LOW_RATIO * np.float32(high))

    strong = inner >= high
    weak = ~strong & (inner >= low)
    edges[1:-1, 1:-1][strong] = STRONG
    edges[1:-1, 1:-1][weak] = WEAK

    pending = deque((int(i), int(j)) for i, j in zip(*np.nonzero(edges == STRONG)))
    while pending:
        i, j = pending.popleft()
        for di, dj in _NEIGHBOURS:
            ni, nj = i + di, j + dj
            if edges[ni, nj] == WEAK:
                edges[ni, nj] = STRONG
                pending.append((ni, nj))

    edges[edges != STRONG] = 0
    return edges


def normalize_to_uint8(values) -> np.ndarray:
    """Min-max scale an array into 0..255 as 8-bit values."""
    data = np.asarray(values, dtype=np.float64)
    if data.size == 0:
        return np.zeros(data.shape, dtype=np.uint8)
    low = float(data.min())
    span = float(data.max()) - low
    if span <= np.finfo(np.float64).eps:
        return np.zeros(data.shape, dtype=np.uint8)
    return _to_uint8((data - low) * (255.0 / span))