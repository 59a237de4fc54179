# mosaic/headless.py

import logging
import time

from mosaic.engine import ApproximationEngine, GenerationResult
from mosaic.image_buffer import ImageBuffer
from mosaic.scoring import total_distance

logger = logging.getLogger(__name__)


class HeadlessRunner:
	"""Runs a bounded number of generations without a window and logs progress."""

	def __init__(self, engine: ApproximationEngine, cfg=None):
		cfg = cfg or {}
		self.max_generations = cfg.get("max_generations", 200)
		self.max_batches = cfg.get("max_batches")
		self.log_every = max(1, cfg.get("log_every", 10))

		self.engine = engine
		self.stopped = False
		self.history = []  # total distance after every completed generation

	def keep_running(self) -> bool:
		if self.stopped:
			return False
		if self.max_batches is not None and self.engine.batch_count >= self.max_batches:
			logger.warning("Batch limit %d reached", self.max_batches)
			return False
		return True

	def record(self, canvas: ImageBuffer, result: GenerationResult):
		distance = total_distance(self.engine.target, canvas)
		self.history.append(distance)
		if result.generation % self.log_every == 0:
			logger.info("Generation %d: distance %.5f (%d commits, batch %d)",
						result.generation, distance, result.committed, result.batch)

	def run(self):
		start = time.time()
		initial = total_distance(self.engine.target, self.engine.canvas)
		logger.info("Initial distance %.5f", initial)

		completed = self.engine.run(
			keep_running=self.keep_running,
			on_generation=self.record,
			max_generations=self.max_generations,
		)

		final = self.history[-1] if self.history else initial
		logger.info("Finished %d generations in %.1fs: distance %.5f -> %.5f",
					completed, time.time() - start, initial, final)
		return completed

	def stop(self):
		self.stopped = True


def register(app_context):
	"""Plugin hook: run the engine without presentation."""
	runner = HeadlessRunner(app_context.engine, app_context.section("headless"))
	app_context.register_module(runner)
	runner.start = runner.run
	logger.info("HeadlessRunner registered")
