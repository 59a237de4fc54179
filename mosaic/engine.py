# mosaic/engine.py
"""
Greedy approximation engine.

Every batch proposes BATCH_SIZE random patches. Each patch is scored
against the canvas as it stands at that moment and composited in place
when it lowers the distance of the region it covers, so later patches
of a batch see the commits of earlier ones.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from mosaic.color_math import BLACK
from mosaic.image_buffer import ImageBuffer
from mosaic.scoring import mutation_distance, region_distance
from mosaic.shapes import Patch, ShapeGenerator

logger = logging.getLogger(__name__)

BATCH_SIZE = 1024


@dataclass
class GenerationResult:
	"""Outcome of one batch."""
	batch: int            # batches evaluated so far, including this one
	generation: int       # completed generations (batches with a commit)
	evaluated: int
	committed: int

	@property
	def changed(self) -> bool:
		return self.committed > 0


class ApproximationEngine:
	"""
	Holds the immutable target and the mutable canvas and evolves the canvas.

	The canvas starts as an opaque uniform `background` buffer of the
	target's size unless one is passed in.
	"""

	def __init__(self, target: ImageBuffer, canvas: Optional[ImageBuffer] = None,
				 generator: Optional[ShapeGenerator] = None,
				 batch_size: int = BATCH_SIZE, background=BLACK):
		if canvas is None:
			canvas = ImageBuffer.filled(target.width, target.height, background)
		if canvas.shape != target.shape:
			raise ValueError(
				f"Canvas {canvas.width}x{canvas.height} does not match "
				f"target {target.width}x{target.height}")
		if batch_size < 1:
			raise ValueError(f"batch_size must be positive, got {batch_size}")

		self.target = target
		self.canvas = canvas
		self.generator = generator if generator is not None else ShapeGenerator()
		self.batch_size = batch_size

		# Diagnostics only
		self.batch_count = 0
		self.generation = 0
		self.total_commits = 0

	def propose(self) -> List[Patch]:
		"""Generate a batch of independent candidates."""
		w, h = self.target.shape
		return [self.generator.generate(w, h) for _ in range(self.batch_size)]

	def try_patch(self, patch: Patch) -> bool:
		"""Score one candidate against the current canvas and commit it if it helps."""
		if patch.is_degenerate:
			return False

		before = region_distance(self.target, self.canvas, patch.rect)
		after = mutation_distance(self.target, self.canvas, patch.buffer, patch.rect.origin)
		if after < before:
			self.commit(patch)
			return True
		return False

	def commit(self, patch: Patch):
		"""Composite the patch into the canvas, cropped to the canvas bounds."""
		pixels = patch.buffer.pixels
		x, y = patch.rect.origin
		gx, gy, lx, ly, cw, ch = self.canvas.clip(x, y, pixels.shape[1], pixels.shape[0])
		if cw == 0 or ch == 0:
			return
		self.canvas.composite(pixels[ly:ly + ch, lx:lx + cw], gx, gy)

	def step(self, candidates: Optional[List[Patch]] = None) -> GenerationResult:
		"""Evaluate one batch in order. A batch without commits is a no-op."""
		if candidates is None:
			candidates = self.propose()

		committed = 0
		for patch in candidates:
			if self.try_patch(patch):
				committed += 1

		self.batch_count += 1
		self.total_commits += committed
		if committed:
			self.generation += 1
			logger.debug("Generation %d: %d/%d patches committed (batch %d)",
						 self.generation, committed, len(candidates), self.batch_count)

		return GenerationResult(
			batch=self.batch_count,
			generation=self.generation,
			evaluated=len(candidates),
			committed=committed,
		)

	def run(self, keep_running: Callable[[], bool] = lambda: True,
			on_generation: Optional[Callable[[ImageBuffer, GenerationResult], None]] = None,
			max_generations: Optional[int] = None) -> int:
		"""
		Run batches until `keep_running()` returns False or `max_generations`
		generations have completed. `keep_running` is checked before every
		batch; `on_generation` receives the canvas only after batches that
		changed it. Returns the number of generations completed by this call.
		"""
		completed = 0
		while keep_running():
			if max_generations is not None and completed >= max_generations:
				break
			result = self.step()
			if not result.changed:
				continue
			completed += 1
			if on_generation is not None:
				on_generation(self.canvas, result)
		return completed
