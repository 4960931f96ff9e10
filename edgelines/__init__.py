"""Canny-style edge detection and Hough line detection on NumPy arrays."""

__version__ = "0.1.0"
__all__ = ["canny", "hough", "cli"]