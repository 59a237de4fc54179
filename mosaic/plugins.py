# mosaic/plugins.py
import importlib
import logging

from mosaic.config import settings

logger = logging.getLogger(__name__)

ENABLED = settings.get("modules") or ["viewer"]


def load_plugins(app_context):
	for name in app_context.config.get("modules") or ENABLED:
		module = importlib.import_module(f"mosaic.{name}")
		module.register(app_context)
		logger.debug("Loaded plugin %s", name)
