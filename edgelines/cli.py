"""Command-line entry point: edge detection and Hough line extraction on an image file."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from edgelines.canny import (
    GradientData,
    gaussian_blur,
    high_pass_filter,
    hysteresis_thresholding,
    non_max_suppression,
    normalize_to_uint8,
    rgb_to_grayscale,
)
from edgelines.hough import (
    HoughResult,
    compare_hough_lines,
    draw_hough_lines,
    hough_space_image,
    hough_transform,
)

EDGES_FILE = "canny_edges.png"
HOUGH_SPACE_FILE = "hough_space.png"
HOUGH_LINES_FILE = "hough_lines.png"
FALSE_NEGATIVES_FILE = "false_negatives.png"


@dataclass(frozen=True)
class PipelineResult:
    """Every intermediate stage of the edge and line pipeline."""

    grayscale: np.ndarray
    blurred: np.ndarray
    gradient: GradientData
    gradient_display: np.ndarray
    suppressed: np.ndarray
    suppressed_display: np.ndarray
    edges: np.ndarray
    hough: HoughResult
    hough_space: np.ndarray
    lines_image: np.ndarray


def run_pipeline(image) -> PipelineResult:
    """Run grayscale, blur, gradient, suppression, hysteresis and Hough on an RGB image."""
    grayscale = rgb_to_grayscale(image)
    blurred = gaussian_blur(grayscale)
    gradient = high_pass_filter(blurred.astype(np.float32))
    suppressed = non_max_suppression(gradient)
    edges = hysteresis_thresholding(suppressed)
    hough = hough_transform(edges)
    return PipelineResult(
        grayscale=grayscale,
        blurred=blurred,
        gradient=gradient,
        gradient_display=normalize_to_uint8(gradient.magnitude),
        suppressed=suppressed,
        suppressed_display=normalize_to_uint8(suppressed),
        edges=edges,
        hough=hough,
        hough_space=hough_space_image(hough.accumulator),
        lines_image=draw_hough_lines(grayscale, hough.lines),
    )


def _read_reference_lines(path: Path) -> list[tuple[float, float]]:
    lines = []
    for raw in path.read_text(encoding="utf-8").splitlines():
        text = raw.split("#", 1)[0].strip()
        if not text:
            continue
        fields = text.replace(",", " ").split()
        if len(fields) != 2:
            raise ValueError(f"expected 'rho theta', got {raw!r}")
        lines.append((float(fields[0]), float(fields[1])))
    return lines


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edgelines",
        description="Detect edges and straight lines in an image.",
    )
    parser.add_argument("image", type=Path, help="input image file")
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=Path("."), help="directory for the result images"
    )
    parser.add_argument(
        "-r",
        "--reference",
        type=Path,
        help="text file of reference lines, one 'rho theta' pair (radians) per line",
    )
    return parser


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    reference = None
    if args.reference is not None:
        try:
            reference = _read_reference_lines(args.reference)
        except (OSError, ValueError) as exc:
            parser.error(f"cannot read reference lines: {exc}")

    try:
        with Image.open(args.image) as picture:
            pixels = np.asarray(picture.convert("RGB"))
    except (OSError, ValueError):
        print("Can't open image!")
        return 1

    result = run_pipeline(pixels)

    output_dir: Path = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    Image.fromarray(result.edges).save(output_dir / EDGES_FILE)
    Image.fromarray(result.hough_space).save(output_dir / HOUGH_SPACE_FILE)
    Image.fromarray(result.lines_image).save(output_dir / HOUGH_LINES_FILE)

    if reference is not None:
        comparison = compare_hough_lines(result.hough.lines, reference)
        print("\n--- Hough Line Comparison Metrics ---")
        print(f"True Positives (shared): {comparison.true_positives}")
        print(f"False Negatives (only custom): {comparison.false_negatives}")
        print(f"False Positives (only reference): {comparison.false_positives}")
        print(f"Precision: {comparison.precision:g}")
        custom_only = draw_hough_lines(result.grayscale, comparison.custom_only_lines, color=(0, 0, 255))
        Image.fromarray(custom_only).save(output_dir / FALSE_NEGATIVES_FILE)

    return 0