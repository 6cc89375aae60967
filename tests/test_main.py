"""Tests for the command-line entry point."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from vgasim.main import main


def test_info(capsys):
    assert main(["--info", "-W", "800", "-H", "600", "-s", "2"]) == 0
    out = capsys.readouterr().out
    assert "800x600" in out
    assert "1600x1200" in out
    assert "Pixel clock" in out


def test_rejects_unlisted_resolution():
    with pytest.raises(SystemExit):
        main(["--width", "123", "--info"])


@pytest.mark.parametrize("frames", ["0", "-2"])
def test_rejects_non_positive_headless_frames(frames, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--headless", frames])
    assert excinfo.value.code == 2
    assert "--headless" in capsys.readouterr().err


def test_rejects_empty_source(capsys):
    assert main(["--headless", "1", "--source-width", "0"]) == 1
    assert "Error" in capsys.readouterr().err


def test_headless_screenshot(tmp_path, capsys):
    path = tmp_path / "bars.bmp"
    assert main(["-W", "320", "-H", "240", "--headless", "1", "--screenshot", str(path)]) == 0
    assert "320x240" in capsys.readouterr().out
    image = pygame.image.load(str(path))
    assert image.get_size() == (320, 240)
    assert tuple(image.get_at((0, 0)))[:3] == (255, 255, 255)
    assert tuple(image.get_at((200, 120)))[:3] == (255, 0, 0)
    assert tuple(image.get_at((319, 239)))[:3] == (0, 0, 0)
