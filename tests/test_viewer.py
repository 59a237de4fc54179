"""Tests for the pygame display adapter, using SDL's dummy video driver."""

import pygame
import pytest

from mosaic.engine import ApproximationEngine
from mosaic.image_buffer import ImageBuffer
from mosaic.viewer import MosaicViewer, register

from tests.conftest import RED


@pytest.fixture
def viewer(red_target, black_canvas):
	engine = ApproximationEngine(red_target, canvas=black_canvas)
	v = MosaicViewer(engine, {"window_size": [40, 30], "caption": "Test"})
	yield v
	v.stop()


class TestMosaicViewer:
	def test_present_scales_canvas_to_window(self, viewer):
		viewer.open()
		viewer.present(ImageBuffer.filled(4, 4, RED))
		assert viewer.screen.get_size() == (40, 30)
		assert tuple(viewer.screen.get_at((39, 29)))[:3] == (255, 0, 0)
		assert tuple(viewer.screen.get_at((0, 0)))[:3] == (255, 0, 0)

	def test_quit_event_stops(self, viewer):
		viewer.open()
		assert viewer.handle_events()
		pygame.event.post(pygame.event.Event(pygame.QUIT))
		assert not viewer.handle_events()

	def test_escape_stops(self, viewer):
		viewer.open()
		pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
		assert not viewer.handle_events()

	def test_run_returns_when_window_closes(self, viewer):
		opened = viewer.open

		def open_then_close():
			opened()
			pygame.event.post(pygame.event.Event(pygame.QUIT))

		viewer.open = open_then_close
		viewer.run()
		assert viewer.engine.batch_count == 0

	def test_canvas_surface(self):
		surface = MosaicViewer.canvas_surface(ImageBuffer.filled(3, 2, RED))
		assert surface.get_size() == (3, 2)
		assert tuple(surface.get_at((2, 1))) == (255, 0, 0, 255)


def test_register(red_target):
	class Ctx:
		def __init__(self):
			self.engine = ApproximationEngine(red_target)
			self.modules = []

		def section(self, name):
			return {"window_size": [20, 20]}

		def register_module(self, module):
			self.modules.append(module)

	ctx = Ctx()
	register(ctx)
	assert isinstance(ctx.modules[0], MosaicViewer)
	assert ctx.modules[0].window_size == (20, 20)
