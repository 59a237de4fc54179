# mosaic/color_math.py
"""
Pixel-level color math: distance metric and source-over compositing.

Pixels are length-4 float arrays (r, g, b, a) with channels in [0, 1].
Both functions broadcast over the last axis, so they work on a single
pixel as well as on whole (H, W, 4) blocks.
"""

import math

import numpy as np

PIXEL_DTYPE = np.float32

# sqrt(3): largest distance between two points of the RGB unit cube
NORMALIZATION_FACTOR = math.sqrt(3.0)


def pixel(r, g, b, a=1.0) -> np.ndarray:
	return np.array([r, g, b, a], dtype=PIXEL_DTYPE)


BLACK = pixel(0.0, 0.0, 0.0, 1.0)
WHITE = pixel(1.0, 1.0, 1.0, 1.0)


def pixel_distance(a, b):
	"""Normalised Euclidean RGB distance, alpha excluded. Returns a float for single pixels."""
	a = np.asarray(a, dtype=np.float64)
	b = np.asarray(b, dtype=np.float64)
	diff = a[..., :3] - b[..., :3]
	dist = np.sqrt(np.sum(diff * diff, axis=-1)) / NORMALIZATION_FACTOR
	if dist.ndim == 0:
		return float(dist)
	return dist


def overlay(base, applied) -> np.ndarray:
	"""
	Composite `applied` over `base` and return the result as a new array.

	rgb = min(base.rgb * (1 - applied.a) + applied.rgb * applied.a, 1)
	a   = min(base.a + applied.a, 1)
	"""
	base = np.asarray(base, dtype=PIXEL_DTYPE)
	applied = np.asarray(applied, dtype=PIXEL_DTYPE)
	alpha = applied[..., 3:4]

	out = np.empty(np.broadcast_shapes(base.shape, applied.shape), dtype=PIXEL_DTYPE)
	out[..., :3] = np.minimum(base[..., :3] * (1 - alpha) + applied[..., :3] * alpha, 1.0)
	out[..., 3] = np.minimum(base[..., 3] + applied[..., 3], 1.0)
	return out
