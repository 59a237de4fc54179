# mosaic/shapes.py

import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

from mosaic.color_math import pixel
from mosaic.image_buffer import ImageBuffer, Rect

# Largest patch side relative to the canvas side
SIZE_RATIO = 0.20


@dataclass
class Patch:
	"""Solid-color candidate mutation and where it would land."""
	buffer: ImageBuffer
	rect: Rect

	@property
	def color(self) -> Optional[np.ndarray]:
		if self.is_degenerate:
			return None
		return self.buffer.get_pixel(0, 0)

	@property
	def is_degenerate(self) -> bool:
		return self.buffer.width == 0 or self.buffer.height == 0


class ShapeGenerator:
	"""
	Random rectangle proposals.

	Extents are drawn from [0, SIZE_RATIO * dim] and origins from
	[0, dim * (1 - SIZE_RATIO)], so a rect always fits the canvas.
	Pass a seeded random.Random for reproducible runs.
	"""

	def __init__(self, rng: Optional[random.Random] = None):
		self.rng = rng if rng is not None else random.Random()

	def random_rect(self, width: float, height: float) -> Rect:
		x = self.rng.uniform(0.0, width * (1.0 - SIZE_RATIO))
		y = self.rng.uniform(0.0, height * (1.0 - SIZE_RATIO))
		w = self.rng.uniform(0.0, width * SIZE_RATIO)
		h = self.rng.uniform(0.0, height * SIZE_RATIO)
		# uniform() may return its upper bound; keep x + w <= width under rounding
		return Rect(x, y, min(w, width - x), min(h, height - y))

	def random_color(self) -> np.ndarray:
		return pixel(*(self.rng.uniform(0.0, 1.0) for _ in range(4)))

	def generate(self, canvas_width: int, canvas_height: int) -> Patch:
		rect = self.random_rect(float(canvas_width), float(canvas_height))
		_, _, w, h = rect.footprint()
		buffer = ImageBuffer.filled(w, h, self.random_color())
		return Patch(buffer=buffer, rect=rect)
