"""Tests for configuration, plugin loading and the console entry point."""

import logging

import numpy as np
import pytest

import cv2

from mosaic import core
from mosaic.config import load_settings
from mosaic.core import AppContext
from mosaic.engine import ApproximationEngine
from mosaic.plugins import load_plugins


def write_target(tmp_path, size=12):
	rng = np.random.default_rng(0)
	path = tmp_path / "target.png"
	cv2.imwrite(str(path), rng.integers(0, 256, (size, size, 3), dtype=np.uint8))
	return path


class TestConfig:
	def test_missing_file_is_empty(self, tmp_path):
		assert load_settings(tmp_path / "absent.yaml") == {}

	def test_parses_yaml(self, tmp_path):
		path = tmp_path / "config.yaml"
		path.write_text("modules:\n  - headless\nengine:\n  seed: 3\n")
		assert load_settings(path) == {"modules": ["headless"], "engine": {"seed": 3}}

	def test_empty_yaml(self, tmp_path):
		path = tmp_path / "config.yaml"
		path.write_text("")
		assert load_settings(path) == {}


class TestAppContext:
	def test_load_builds_engine(self, tmp_path):
		ctx = AppContext({"target": {"path": str(write_target(tmp_path))}, "engine": {"seed": 1}})
		engine = ctx.load()
		assert isinstance(engine, ApproximationEngine)
		assert engine.target.shape == (12, 12)
		assert ctx.engine is engine

	def test_same_seed_same_proposals(self, tmp_path):
		path = str(write_target(tmp_path))
		cfg = {"target": {"path": path}, "engine": {"seed": 11}}
		a = AppContext(cfg).load().generator.generate(100, 100)
		b = AppContext(cfg).load().generator.generate(100, 100)
		assert a.rect == b.rect

	def test_missing_target(self, tmp_path):
		ctx = AppContext({"target": {"path": str(tmp_path / "missing.png")}})
		with pytest.raises(FileNotFoundError):
			ctx.load()

	def test_interrupt_stops_every_module(self):
		calls = []

		class Interrupted:
			def start(self):
				raise KeyboardInterrupt

			def stop(self):
				calls.append("a")

		class Idle:
			def stop(self):
				calls.append("b")

		ctx = AppContext({})
		ctx.register_module(Interrupted())
		ctx.register_module(Idle())
		ctx.run()
		assert calls == ["a", "b"]


class TestPlugins:
	def test_headless_plugin_registers(self, tmp_path):
		ctx = AppContext({"modules": ["headless"], "target": {"path": str(write_target(tmp_path))}})
		ctx.load()
		load_plugins(ctx)
		assert len(ctx.modules) == 1
		assert ctx.modules[0].start == ctx.modules[0].run

	def test_unknown_plugin(self):
		ctx = AppContext({"modules": ["no_such_plugin"]})
		with pytest.raises(ModuleNotFoundError):
			load_plugins(ctx)


class TestMain:
	def test_missing_target_exits(self, tmp_path, monkeypatch, caplog):
		monkeypatch.setattr(core, "settings", {"target": {"path": str(tmp_path / "gone.png")}})
		with caplog.at_level(logging.ERROR):
			with pytest.raises(SystemExit) as exc:
				core.main()
		assert exc.value.code == 1
		assert "Cannot start" in caplog.text

	def test_headless_run(self, tmp_path, monkeypatch):
		monkeypatch.setattr(core, "settings", {
			"modules": ["headless"],
			"target": {"path": str(write_target(tmp_path, size=16))},
			"engine": {"seed": 5},
			"headless": {"max_generations": 2, "log_every": 1},
		})
		core.main()
