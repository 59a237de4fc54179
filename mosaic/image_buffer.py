# mosaic/image_buffer.py

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from mosaic.color_math import PIXEL_DTYPE, overlay


@dataclass(frozen=True)
class Rect:
	"""Axis-aligned rectangle with float origin and extent."""
	x: float
	y: float
	w: float
	h: float

	@property
	def origin(self) -> Tuple[int, int]:
		"""Integer pixel origin (truncated)."""
		return int(self.x), int(self.y)

	@property
	def area(self) -> float:
		return self.w * self.h

	def footprint(self) -> Tuple[int, int, int, int]:
		"""(x, y, w, h) of the pixels this rect covers, all truncated to int."""
		return int(self.x), int(self.y), int(self.w), int(self.h)

	def contains_within(self, width: int, height: int) -> bool:
		return (self.x >= 0 and self.y >= 0
				and self.x + self.w <= width
				and self.y + self.h <= height)


class ImageBuffer:
	"""
	Width x height grid of RGBA float pixels.

	Storage is a row-major (H, W, 4) float32 array owned by the buffer.
	The size is fixed at construction; there is no resize.
	"""

	def __init__(self, pixels: np.ndarray):
		pixels = np.asarray(pixels, dtype=PIXEL_DTYPE)
		if pixels.ndim != 3 or pixels.shape[2] != 4:
			raise ValueError(f"Expected (H, W, 4) pixel data, got shape {pixels.shape}")
		# own the storage, never alias the caller's array
		self.pixels = np.array(pixels, dtype=PIXEL_DTYPE, copy=True)

	@classmethod
	def filled(cls, width: int, height: int, color) -> "ImageBuffer":
		if width < 0 or height < 0:
			raise ValueError(f"Invalid buffer size {width}x{height}")
		pixels = np.empty((height, width, 4), dtype=PIXEL_DTYPE)
		pixels[:, :] = np.asarray(color, dtype=PIXEL_DTYPE)
		return cls(pixels)

	@classmethod
	def from_rgba8(cls, data: np.ndarray) -> "ImageBuffer":
		"""Build from an (H, W, 4) uint8 RGBA array."""
		return cls(np.asarray(data, dtype=PIXEL_DTYPE) / 255.0)

	@property
	def width(self) -> int:
		return self.pixels.shape[1]

	@property
	def height(self) -> int:
		return self.pixels.shape[0]

	@property
	def shape(self) -> Tuple[int, int]:
		"""(width, height)"""
		return self.width, self.height

	def _check_bounds(self, x: int, y: int):
		if not (0 <= x < self.width and 0 <= y < self.height):
			raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")

	def get_pixel(self, x: int, y: int) -> np.ndarray:
		self._check_bounds(x, y)
		return self.pixels[y, x].copy()

	def set_pixel(self, x: int, y: int, value):
		self._check_bounds(x, y)
		self.pixels[y, x] = np.asarray(value, dtype=PIXEL_DTYPE)

	def view(self, x: int, y: int, w: int, h: int) -> np.ndarray:
		"""Slice of the storage covering the block; callers must not write through it."""
		if x < 0 or y < 0 or w < 0 or h < 0 or x + w > self.width or y + h > self.height:
			raise IndexError(
				f"Block ({x}, {y}, {w}, {h}) outside {self.width}x{self.height} buffer")
		return self.pixels[y:y + h, x:x + w]

	def composite(self, block: np.ndarray, x: int, y: int):
		"""Overlay `block` onto this buffer in place with its top-left at (x, y)."""
		h, w = block.shape[:2]
		target = self.view(x, y, w, h)
		target[...] = overlay(target, block)

	def clip(self, x: int, y: int, w: int, h: int) -> Tuple[int, int, int, int, int, int]:
		"""
		Intersect a w x h block placed at (x, y) with the buffer.

		Returns (gx, gy, lx, ly, cw, ch): global origin of the overlap, its
		offset inside the block, and the clipped size. cw or ch is 0 when
		nothing overlaps.
		"""
		gx0, gy0 = max(x, 0), max(y, 0)
		gx1, gy1 = min(x + w, self.width), min(y + h, self.height)
		cw, ch = max(gx1 - gx0, 0), max(gy1 - gy0, 0)
		return gx0, gy0, gx0 - x, gy0 - y, cw, ch

	def copy(self) -> "ImageBuffer":
		return ImageBuffer(self.pixels)

	def to_rgba8(self) -> np.ndarray:
		"""(H, W, 4) uint8 copy for presentation."""
		return np.clip(np.rint(self.pixels * 255.0), 0, 255).astype(np.uint8)

	def __repr__(self):
		return f"ImageBuffer({self.width}x{self.height})"
