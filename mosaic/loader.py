# mosaic/loader.py

import logging
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

from mosaic.image_buffer import ImageBuffer

logger = logging.getLogger(__name__)


def to_rgba(img: np.ndarray) -> np.ndarray:
	"""Convert an OpenCV (BGR/BGRA/gray) array into RGBA with the same dtype."""
	if img.ndim == 2:
		return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
	if img.shape[2] == 1:
		return cv2.cvtColor(img[:, :, 0], cv2.COLOR_GRAY2RGBA)
	if img.shape[2] == 3:
		return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
	if img.shape[2] == 4:
		return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
	raise ValueError(f"Unsupported channel count: {img.shape[2]}")


def normalize(rgba: np.ndarray) -> np.ndarray:
	"""Scale integer pixel data into [0, 1] floats."""
	if np.issubdtype(rgba.dtype, np.integer):
		return rgba.astype(np.float32) / float(np.iinfo(rgba.dtype).max)
	return np.clip(rgba.astype(np.float32), 0.0, 1.0)


def limit_size(img: np.ndarray, max_side: Optional[int]) -> np.ndarray:
	"""Downscale so the longest side is at most `max_side`; never upscales."""
	if not max_side:
		return img
	h, w = img.shape[:2]
	longest = max(w, h)
	if longest <= max_side:
		return img
	scale = max_side / longest
	size = (max(1, int(round(w * scale))), max(1, int(round(h * scale))))
	return cv2.resize(img, size, interpolation=cv2.INTER_AREA)


def load_target(path: Union[str, Path], max_side: Optional[int] = None) -> ImageBuffer:
	"""Decode an image file into an RGBA float ImageBuffer."""
	path = Path(path)
	img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
	if img is None:
		raise FileNotFoundError(f"Image not found or unreadable: {path}")

	img = limit_size(img, max_side)
	target = ImageBuffer(normalize(to_rgba(img)))
	logger.info("Loaded target %s (%dx%d)", path, target.width, target.height)
	return target
