# mosaic/viewer.py

import logging

import pygame

from mosaic.engine import ApproximationEngine, GenerationResult
from mosaic.image_buffer import ImageBuffer

logger = logging.getLogger(__name__)

DARKGRAY = (80, 80, 80)


class MosaicViewer:
	"""pygame window that shows the canvas after every generation that changed it."""

	def __init__(self, engine: ApproximationEngine, cfg=None):
		# ==== CONFIGURABLE (config["viewer"]) ====
		cfg = cfg or {}
		self.window_size = tuple(cfg.get("window_size", (600, 600)))
		self.caption = cfg.get("caption", "Mosaic")
		self.fps = cfg.get("fps", 0)

		self.engine = engine
		self.screen = None
		self.clock = None
		self.running = False

	def open(self):
		pygame.init()
		self.screen = pygame.display.set_mode(self.window_size, pygame.RESIZABLE)
		pygame.display.set_caption(self.caption)
		self.clock = pygame.time.Clock()
		self.running = True

	def handle_events(self):
		"""Window close and ESC stop the loop."""
		for e in pygame.event.get():
			if e.type == pygame.QUIT:
				self.running = False
			elif e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE:
				self.running = False
		return self.running

	@staticmethod
	def canvas_surface(canvas: ImageBuffer):
		rgba = canvas.to_rgba8()
		return pygame.image.frombuffer(rgba.tobytes(), (canvas.width, canvas.height), "RGBA")

	def present(self, canvas: ImageBuffer, result: GenerationResult = None):
		screen_w, screen_h = self.screen.get_size()
		scaled = pygame.transform.scale(self.canvas_surface(canvas), (screen_w, screen_h))

		self.screen.fill(DARKGRAY)
		self.screen.blit(scaled, (0, 0))
		pygame.display.flip()

		if result is not None:
			pygame.display.set_caption(f"{self.caption} - generation {result.generation}")
		if self.fps:
			self.clock.tick(self.fps)

	def run(self):
		self.open()
		self.present(self.engine.canvas)
		self.engine.run(keep_running=self.handle_events, on_generation=self.present)
		logger.info("Viewer closed after %d generations", self.engine.generation)

	def stop(self):
		self.running = False
		if pygame.get_init():
			pygame.quit()
			logger.info("Pygame quit")


def register(app_context):
	"""Plugin hook: present the engine's canvas in a pygame window."""
	viewer = MosaicViewer(app_context.engine, app_context.section("viewer"))
	# pygame calls stay on the main thread
	app_context.register_module(viewer)
	viewer.start = viewer.run
	logger.info("MosaicViewer registered")
