import logging
import random
import sys

from mosaic.config import settings
from mosaic.engine import ApproximationEngine
from mosaic.loader import load_target
from mosaic.plugins import load_plugins
from mosaic.shapes import ShapeGenerator

logger = logging.getLogger(__name__)


def setup_logging(level=None):
	if level is None:
		level = (settings.get("logging") or {}).get("level", "INFO")
	logging.basicConfig(
		level=level,
		format="%(asctime)s [%(name)s] %(levelname)s: %(message)s"
	)


class AppContext:
	def __init__(self, config=None):
		self.config = config if config is not None else settings
		self.modules = []
		self.engine = None

	def section(self, name):
		return self.config.get(name) or {}

	def register_module(self, module):
		self.modules.append(module)

	def build_engine(self, target):
		seed = self.section("engine").get("seed")
		rng = random.Random(seed)
		self.engine = ApproximationEngine(target, generator=ShapeGenerator(rng))
		logger.info("Engine ready: %dx%d canvas, seed=%s", target.width, target.height, seed)
		return self.engine

	def load(self):
		cfg = self.section("target")
		target = load_target(cfg.get("path", "images/target.png"), cfg.get("max_side"))
		return self.build_engine(target)

	def run(self):
		try:
			for mod in self.modules:
				if hasattr(mod, "start"):
					mod.start()
		except KeyboardInterrupt:
			logger.info("Interrupted")
		finally:
			for mod in self.modules:
				if hasattr(mod, "stop"):
					mod.stop()


def main():
	"""Console entry point for the `mosaic` command."""
	setup_logging()
	ctx = AppContext()
	try:
		ctx.load()
	except FileNotFoundError as e:
		logger.error("Cannot start: %s", e)
		sys.exit(1)
	load_plugins(ctx)
	ctx.run()


if __name__ == "__main__":
	main()
