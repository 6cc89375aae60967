"""Tests for converting the frame buffer into pygame surfaces."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame

from vgasim.core.configuration import Configuration
from vgasim.core.types import Sample
from vgasim.core.vga_display import VgaDisplay
from vgasim.shell.frame_renderer import FrameRenderer, packed_to_rgb


def _rgb_at(surface, x, y):
    return tuple(surface.get_at((x, y)))[:3]


class TestPackedToRgb:

    def test_splits_channels(self):
        pixels = np.array([[0x123456, 0xFF0000], [0x00FF00, 0x0000FF]], dtype=np.uint32)
        rgb = packed_to_rgb(pixels)
        assert rgb.shape == (2, 2, 3)
        assert rgb.dtype == np.uint8
        assert tuple(rgb[0, 0]) == (0x12, 0x34, 0x56)
        assert tuple(rgb[1, 1]) == (0, 0, 0xFF)


class TestFrameRenderer:

    def test_render_matches_buffer(self, context):
        display = VgaDisplay("vga", Configuration(4, 2, strict=False))
        display.feed(
            context,
            [
                Sample(255, 0, 0, clock=True),
                Sample(clock=False),
                Sample(0, 255, 0, clock=True),
            ],
        )
        renderer = FrameRenderer(display, context)
        surface = renderer.render()
        assert surface.get_size() == (4, 2)
        assert _rgb_at(surface, 0, 0) == (255, 0, 0)
        assert _rgb_at(surface, 1, 0) == (0, 255, 0)
        assert _rgb_at(surface, 2, 0) == (0, 0, 0)

    def test_surface_follows_resize(self, context):
        config = Configuration(320, 240)
        display = VgaDisplay("vga", config)
        renderer = FrameRenderer(display, context)
        assert (renderer.width, renderer.height) == (320, 240)
        config.width = 640
        config.height = 480
        assert renderer.render().get_size() == (640, 480)
        assert renderer.surface.get_size() == (640, 480)

    def test_save(self, context, tmp_path):
        display = VgaDisplay("vga", Configuration(2, 2, strict=False))
        display.propagate(context, Sample(0, 0, 255, clock=True))
        path = tmp_path / "frame.bmp"
        FrameRenderer(display, context).save(str(path))
        loaded = pygame.image.load(str(path))
        assert loaded.get_size() == (2, 2)
        assert _rgb_at(loaded, 0, 0) == (0, 0, 255)
