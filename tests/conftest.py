"""Shared test fixtures."""

import os
import random

# pygame must not open a real window under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from mosaic.color_math import BLACK, pixel
from mosaic.engine import ApproximationEngine
from mosaic.image_buffer import ImageBuffer
from mosaic.shapes import ShapeGenerator

RED = pixel(1.0, 0.0, 0.0, 1.0)


def noise_image(width, height, seed=0) -> ImageBuffer:
	"""Opaque random-color image."""
	rng = np.random.default_rng(seed)
	pixels = rng.random((height, width, 4), dtype=np.float32)
	pixels[..., 3] = 1.0
	return ImageBuffer(pixels)


@pytest.fixture
def red_target() -> ImageBuffer:
	return ImageBuffer.filled(4, 4, RED)


@pytest.fixture
def black_canvas() -> ImageBuffer:
	return ImageBuffer.filled(4, 4, BLACK)


@pytest.fixture
def noise_target() -> ImageBuffer:
	return noise_image(24, 24)


@pytest.fixture
def seeded_engine(noise_target) -> ApproximationEngine:
	generator = ShapeGenerator(random.Random(1234))
	return ApproximationEngine(noise_target, generator=generator, batch_size=64)
