"""Standard Hough transform for straight lines, plus drawing and comparison helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from PIL import Image, ImageDraw

THETA_STEPS = 180
LINE_LENGTH = 1000
HOUGH_SPACE_SIZE = (400, 400)

_THETAS = (np.arange(THETA_STEPS) * math.pi / 180).astype(np.float32)
_COS = np.cos(_THETAS.astype(np.float64))
_SIN = np.sin(_THETAS.astype(np.float64))
_CHUNK = 4096


@dataclass(frozen=True)
class HoughResult:
    """Detected (rho, theta) lines and the vote accumulator (rho bins x theta bins)."""

    lines: list[tuple[float, float]]
    accumulator: np.ndarray
    rho_max: int
    threshold: int


@dataclass(frozen=True)
class LineComparison:
    """Agreement between two sets of lines after quantisation."""

    true_positives: int
    false_negatives: int
    false_positives: int
    precision: float
    custom_only_lines: list[tuple[float, float]] = field(default_factory=list)


def _round_nearest(value: float) -> int:
    return int(np.rint(value))


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def hough_transform(edges) -> HoughResult:
    """Vote every 255-valued pixel into a (rho, theta) accumulator and pick lines.

    A line is reported when its bin holds more than max(60, nonzero / 100) votes.
    """
    image = np.asarray(edges)
    if image.ndim != 2 or image.size == 0:
        raise ValueError("edges must be a non-empty 2-D array")

    height, width = image.shape
    rho_max = int(math.sqrt(width * width + height * height))
    rho_steps = 2 * rho_max
    cells = rho_steps * THETA_STEPS

    votes = np.zeros(cells, dtype=np.int64)
    ys, xs = np.nonzero(image == 255)
    theta_index = np.arange(THETA_STEPS)
    for start in range(0, xs.size, _CHUNK):
        x = xs[start : start + _CHUNK, None].astype(np.float64)
        y = ys[start : start + _CHUNK, None].astype(np.float64)
        rho = np.rint(x * _COS + y * _SIN).astype(np.int64) + rho_max
        valid = (rho >= 0) & (rho < rho_steps)
        flat = (rho * THETA_STEPS + theta_index)[valid]
        votes += np.bincount(flat, minlength=cells)
    accumulator = votes.reshape(rho_steps, THETA_STEPS)

    threshold = max(60, int(np.count_nonzero(image)) // 100)
    rho_bins, theta_bins = np.nonzero(accumulator > threshold)
    lines = [
        (float(r - rho_max), float(_THETAS[t]))
        for r, t in zip(rho_bins.tolist(), theta_bins.tolist())
    ]
    return HoughResult(lines=lines, accumulator=accumulator, rho_max=rho_max, threshold=threshold)


def hough_space_image(accumulator, size=HOUGH_SPACE_SIZE) -> np.ndarray:
    """Render the accumulator as an 8-bit image scaled to its peak and resized to (width, height)."""
    votes = np.asarray(accumulator, dtype=np.float32)
    if votes.ndim != 2 or votes.size == 0:
        raise ValueError("accumulator must be a non-empty 2-D array")
    peak = float(votes.max())
    if peak > 0:
        scaled = np.clip(np.rint(votes.astype(np.float64) * (255.0 / peak)), 0, 255).astype(np.uint8)
    else:
        scaled = np.zeros(votes.shape, dtype=np.uint8)
    width, height = size
    resized = Image.fromarray(scaled).resize((int(width), int(height)), Image.Resampling.BILINEAR)
    return np.asarray(resized)


def line_endpoints(rho, theta, length=LINE_LENGTH) -> tuple[tuple[int, int], tuple[int, int]]:
    """Two points, `length` away on either side of the foot of the normal, on the line."""
    a, b = math.cos(theta), math.sin(theta)
    x0, y0 = a * rho, b * rho
    first = (_round_nearest(x0 + length * (-b)), _round_nearest(y0 + length * a))
    second = (_round_nearest(x0 - length * (-b)), _round_nearest(y0 - length * a))
    return first, second


def draw_hough_lines(image, lines, color=(255, 0, 0)) -> np.ndarray:
    """Return an RGB copy of `image` with each (rho, theta) line drawn one pixel wide."""
    pixels = np.asarray(image)
    if pixels.ndim == 2:
        pixels = np.stack([pixels, pixels, pixels], axis=-1)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError("image must be grayscale or have three channels")
    canvas = Image.fromarray(pixels.astype(np.uint8))
    pen = ImageDraw.Draw(canvas)
    fill = tuple(int(channel) for channel in color)
    for rho, theta in lines:
        pen.line(list(line_endpoints(rho, theta)), fill=fill, width=1)
    return np.array(canvas)


def quantize_line(rho, theta, rho_bin=2, theta_bin_deg=2) -> tuple[int, int]:
    """Bin a (rho, theta) line for approximate matching."""
    return (
        _round_half_away(rho / rho_bin),
        _round_half_away(theta * 180.0 / math.pi / theta_bin_deg),
    )


def compare_hough_lines(custom_lines, reference_lines, rho_bin=2, theta_bin_deg=2) -> LineComparison:
    """Count quantised lines shared by both sets, found only in custom, and only in reference."""
    custom_bins: dict[tuple[int, int], tuple[float, float]] = {}
    for rho, theta in custom_lines:
        custom_bins[quantize_line(rho, theta, rho_bin, theta_bin_deg)] = (rho, theta)

    reference_bins = {
        quantize_line(float(rho), float(theta), rho_bin, theta_bin_deg) for rho, theta in reference_lines
    }

    custom_keys = set(custom_bins)
    shared = len(custom_keys & reference_bins)
    custom_only = sorted(custom_keys - reference_bins)
    reference_only = len(reference_bins - custom_keys)

    return LineComparison(
        true_positives=shared,
        false_negatives=len(custom_only),
        false_positives=reference_only,
        precision=shared / (shared + reference_only + 1e-6),
        custom_only_lines=[custom_bins[key] for key in custom_only],
    )