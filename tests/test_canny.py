import numpy as np
import pytest

from edgelines.canny import (
    GradientData,
    apply_kernel,
    gaussian_blur,
    high_pass_filter,
    hysteresis_thresholding,
    non_max_suppression,
    normalize_to_uint8,
    rgb_to_grayscale,
)


def _vertical_step(rows=10, cols=10, split=5, value=100.0):
    image = np.zeros((rows, cols), dtype=np.float32)
    image[:, split:] = value
    return image


def test_grayscale_of_equal_channels_is_that_channel():
    values = np.arange(12, dtype=np.uint8).reshape(3, 4)
    image = np.stack([values, values, values], axis=-1)
    result = rgb_to_grayscale(image)
    assert result.dtype == np.uint8
    assert np.array_equal(result, values)


def test_grayscale_rejects_single_channel():
    with pytest.raises(ValueError):
        rgb_to_grayscale(np.zeros((4, 4), dtype=np.uint8))


def test_grayscale_never_exceeds_brightest_channel():
    image = np.array(
        [
            [[0, 0, 255], [255, 255, 255], [1, 2, 3]],
            [[10, 20, 31], [200, 0, 100], [255, 255, 0]],
        ],
        dtype=np.uint8,
    )
    result = rgb_to_grayscale(image)
    expected = np.array([[85, 255, 2], [20, 100, 170]], dtype=np.uint8)
    assert np.array_equal(result, expected)
    assert bool(np.all(result <= image.max(axis=2))) is True
    assert bool(np.all(result >= image.min(axis=2))) is True


def test_apply_kernel_identity_returns_source():
    rng = np.random.default_rng(2)
    source = rng.random((6, 7)).astype(np.float32)
    kernel = [[0, 0, 0], [0, 1, 0], [0, 0, 0]]
    assert np.allclose(apply_kernel(source, kernel), source)


def test_apply_kernel_replicates_border():
    source = np.arange(20, dtype=np.float32).reshape(4, 5)
    left_neighbour = [[0, 0, 0], [1, 0, 0], [0, 0, 0]]
    result = apply_kernel(source, left_neighbour)
    assert np.array_equal(result[:, 0], source[:, 0])
    assert np.array_equal(result[:, 1:], source[:, :-1])


def test_apply_kernel_rejects_non_square_kernel():
    with pytest.raises(ValueError):
        apply_kernel(np.zeros((4, 4)), [[1, 2, 3], [4, 5, 6]])


def test_gaussian_blur_keeps_constant_image():
    source = np.full((9, 9), 100, dtype=np.uint8)
    result = gaussian_blur(source)
    assert result.dtype == np.uint8
    assert np.array_equal(result, source)


def test_gaussian_blur_stays_within_input_range():
    rng = np.random.default_rng(3)
    source = rng.integers(40, 90, size=(12, 12), dtype=np.uint8)
    result = gaussian_blur(source)
    assert result.min() >= source.min()
    assert result.max() <= source.max()


def test_high_pass_filter_flat_image_has_no_gradient():
    grad = high_pass_filter(np.full((6, 6), 42.0, dtype=np.float32))
    assert np.all(grad.magnitude == 0)


def test_high_pass_filter_vertical_step_points_along_x():
    grad = high_pass_filter(_vertical_step())
    assert np.all(grad.magnitude[:, 4] > 0)
    assert np.allclose(grad.direction[:, 4], 0.0)
    assert np.all(grad.magnitude[:, 0] == 0)


def test_high_pass_filter_horizontal_step_direction():
    grad = high_pass_filter(_vertical_step().T.copy())
    assert np.all(grad.magnitude[4, :] > 0)
    assert np.allclose(grad.direction[4, :], -np.pi / 2)


def test_non_max_suppression_thins_step_edge():
    suppressed = non_max_suppression(high_pass_filter(_vertical_step()))
    assert np.array_equal(np.unique(np.nonzero(suppressed)[1]), [4, 5])
    assert np.all(suppressed[0, :] == 0)
    assert np.all(suppressed[-1, :] == 0)


def test_non_max_suppression_rejects_mismatched_shapes():
    grad = GradientData(magnitude=np.zeros((4, 4)), direction=np.zeros((3, 4)))
    with pytest.raises(ValueError):
        non_max_suppression(grad)


def test_hysteresis_without_response_marks_whole_interior():
    edges = hysteresis_thresholding(np.zeros((6, 7), dtype=np.float32))
    assert np.all(edges[1:-1, 1:-1] == 255)
    assert np.all(edges[0, :] == 0)
    assert np.all(edges[:, -1] == 0)


def test_hysteresis_keeps_connected_weak_pixels_only():
    magnitude = np.zeros((20, 20), dtype=np.float32)
    magnitude[2:18, 5] = 1024.0
    magnitude[10, 6] = 800.0
    magnitude[10, 7] = 800.0
    magnitude[10, 15] = 800.0
    edges = hysteresis_thresholding(magnitude)
    assert np.all(edges[2:18, 5] == 255)
    assert edges[10, 6] == 255
    assert edges[10, 7] == 255
    assert edges[10, 15] == 0
    assert set(np.unique(edges).tolist()) <= {0, 255}


def test_normalize_to_uint8_spans_full_range():
    result = normalize_to_uint8(np.array([[2.0, 4.0], [6.0, 10.0]]))
    assert result.dtype == np.uint8
    assert result.min() == 0
    assert result.max() == 255


def test_normalize_to_uint8_constant_is_zero():
    assert np.array_equal(normalize_to_uint8(np.full((3, 3), 7.0)), np.zeros((3, 3), dtype=np.uint8))