# mosaic/scoring.py
"""
Distance between the target and the canvas over rectangular regions.

`region_distance` measures the current mismatch under a rect,
`mutation_distance` the mismatch a patch would leave behind if it were
composited at a given placement. Neither mutates a buffer.
"""

from typing import Tuple, Union

import numpy as np

from mosaic.color_math import overlay, pixel_distance
from mosaic.image_buffer import ImageBuffer, Rect


def _check_same_size(target: ImageBuffer, canvas: ImageBuffer):
	if target.shape != canvas.shape:
		raise ValueError(
			f"Target {target.width}x{target.height} and canvas "
			f"{canvas.width}x{canvas.height} differ in size")


def region_distance(target: ImageBuffer, canvas: ImageBuffer, region: Rect) -> float:
	"""Mean per-pixel distance under `region`, divided by the rect's nominal area."""
	_check_same_size(target, canvas)
	if not region.contains_within(target.width, target.height):
		raise ValueError(f"{region} is not inside the {target.width}x{target.height} image")

	area = region.area
	if area <= 0:
		return 0.0

	x, y, w, h = region.footprint()
	dist = pixel_distance(target.view(x, y, w, h), canvas.view(x, y, w, h))
	return float(np.sum(dist)) / area


def mutation_distance(target: ImageBuffer, canvas: ImageBuffer,
					  patch_pixels: Union[ImageBuffer, np.ndarray],
					  placement: Tuple[int, int]) -> float:
	"""
	Mean distance after compositing `patch_pixels` with its top-left at `placement`.

	Patch pixels falling outside the canvas are cropped away and the mean
	is taken over the pixels actually sampled. Returns 0.0 when the patch
	is empty or lies entirely off the canvas.
	"""
	_check_same_size(target, canvas)
	if isinstance(patch_pixels, ImageBuffer):
		patch_pixels = patch_pixels.pixels

	ph, pw = patch_pixels.shape[:2]
	gx, gy, lx, ly, cw, ch = canvas.clip(int(placement[0]), int(placement[1]), pw, ph)
	if cw == 0 or ch == 0:
		return 0.0

	block = patch_pixels[ly:ly + ch, lx:lx + cw]
	blended = overlay(canvas.view(gx, gy, cw, ch), block)
	dist = pixel_distance(target.view(gx, gy, cw, ch), blended)
	return float(np.sum(dist)) / (cw * ch)


def total_distance(target: ImageBuffer, canvas: ImageBuffer) -> float:
	"""Mean per-pixel distance over the whole image."""
	_check_same_size(target, canvas)
	if target.width == 0 or target.height == 0:
		return 0.0
	return float(np.mean(pixel_distance(target.pixels, canvas.pixels)))
