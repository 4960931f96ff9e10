# edgelines

Edge and straight-line detection for images, written step by step with
NumPy. Pillow reads and writes the image files.

The pipeline has these steps:

1. grayscale conversion, using the integer average of the three colour channels;
2. a 5×5 Gaussian blur, with border pixels replicated;
3. Sobel gradients, giving magnitude and direction in radians;
4. non-maximum suppression along the gradient direction, with the direction
   rounded to one of four orientations;
5. hysteresis thresholding. The magnitudes are first scaled by 255/1024 into
   8-bit values. The high threshold keeps the strongest 5 % of the non-zero
   interior responses. The low threshold is 40 % of the high one. A weak pixel
   is kept only when it is 8-connected to a strong pixel.
6. a Hough transform over 180 one-degree angle steps. A (rho, theta) bin is
   reported as a line when it holds more than `max(60, edge_pixels // 100)`
   votes.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Command line

```
edgelines photo.bmp
edgelines photo.bmp -o results
edgelines photo.bmp -o results -r reference.txt
```

The command runs the whole pipeline on the image and writes these files to
the output directory. The default directory is the current one, and it is
created if it does not exist.

- `canny_edges.png`: the binary 0/255 edge map;
- `hough_space.png`: the vote accumulator, scaled to its peak and resized
  to 400×400;
- `hough_lines.png`: the grayscale image with the detected lines drawn in red.

`-r/--reference FILE` gives a text file of lines to compare against. Each line
of the file holds one `rho theta` pair, with theta in radians, separated by
whitespace or a comma. Blank lines and text after `#` are ignored. When this
option is given, the command prints the comparison counts and the precision.
It also writes `false_negatives.png`, which shows in blue the lines that were
found only by the pipeline.

If the image cannot be opened, the command prints `Can't open image!` and
exits with status 1. An unreadable or malformed reference file is reported as
a usage error.

## Library use

```python
import numpy as np
from PIL import Image

from edgelines.canny import (
    rgb_to_grayscale, gaussian_blur, high_pass_filter,
    non_max_suppression, hysteresis_thresholding,
)
from edgelines.hough import hough_transform, draw_hough_lines

rgb = np.asarray(Image.open("photo.bmp").convert("RGB"))
gray = rgb_to_grayscale(rgb)
blurred = gaussian_blur(gray)
gradient = high_pass_filter(blurred.astype(np.float32))
edges = hysteresis_thresholding(non_max_suppression(gradient))

result = hough_transform(edges)
for rho, theta in result.lines:
    print(f"rho={rho:.0f} theta={theta:.3f}")

drawn = draw_hough_lines(gray, result.lines, (255, 0, 0))
Image.fromarray(drawn).save("lines.png")
```

### `edgelines.canny`

- `rgb_to_grayscale(image)`: converts an H×W×3 array to H×W `uint8`.
- `apply_kernel(source, kernel)`: correlates the image with a square kernel,
  replicating border pixels. The result is `float32`.
- `gaussian_blur(source)`: applies the 5×5 Gaussian kernel and returns `uint8`.
- `high_pass_filter(source)`: returns a `GradientData` with `magnitude` and
  `direction`.
- `non_max_suppression(grad)`: keeps only the local maxima. The border pixels
  are zero.
- `hysteresis_thresholding(magnitude)`: returns a 0/255 `uint8` edge map.
- `normalize_to_uint8(values)`: min-max scales an array into 0..255. A
  constant array gives all zeros.

### `edgelines.hough`

- `hough_transform(edges)`: votes every pixel equal to 255. It returns a
  `HoughResult` with `lines` (a list of `(rho, theta)`), `accumulator` (an
  array of shape `(2 * rho_max, 180)`, where row `r` holds
  `rho = r - rho_max`), `rho_max` and `threshold`.
- `hough_space_image(accumulator, size=(400, 400))`: draws the accumulator as
  an 8-bit image with the given (width, height).
- `line_endpoints(rho, theta, length=1000)`: returns two integer points on the
  line, `length` away on each side of the foot of the normal.
- `draw_hough_lines(image, lines, color=(255, 0, 0))`: returns an RGB copy of
  a grayscale or RGB image with the lines drawn one pixel wide. The input is
  not modified.
- `quantize_line(rho, theta, rho_bin=2, theta_bin_deg=2)`: puts a line into a
  (rho, theta) bin.
- `compare_hough_lines(custom_lines, reference_lines, rho_bin=2, theta_bin_deg=2)`:
  matches the quantised lines of both sets. It returns a `LineComparison` with
  `true_positives`, `false_negatives` (found only in custom), `false_positives`
  (found only in reference), `precision` and `custom_only_lines`.

### `edgelines.cli`

`run_pipeline(image)` runs every step on an RGB array in one call. It returns
a `PipelineResult` that holds each step's output: `grayscale`, `blurred`,
`gradient`, `gradient_display`, `suppressed`, `suppressed_display`, `edges`,
`hough`, `hough_space` and `lines_image`. `main(argv=None)` is the
command-line entry point.

## What it does not do

Nothing is shown on screen. All results are written as image files or printed
as text. The package has no second line detector of its own to compare
against. The reference lines for a comparison must come from a file given
with `--reference`.