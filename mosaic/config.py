# mosaic/config.py

import os
from pathlib import Path

import yaml

# config.yaml sits in the parent directory of this package unless overridden
CONFIG_PATH = Path(os.environ.get("MOSAIC_CONFIG", Path(__file__).parent.parent / "config.yaml"))


def load_settings(path):
	path = Path(path)
	if not path.is_file():
		return {}
	with open(path, "r") as f:
		return yaml.safe_load(f) or {}


# Load once at import time
settings = load_settings(CONFIG_PATH)
