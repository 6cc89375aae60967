"""
Test-pattern signal source.

Produces the clocked sample stream a simple VGA generator would drive onto
the display pins: two samples per pixel (clock low, clock high), one vsync
pulse at the start of each frame and, optionally, an hsync pulse between
lines.

Line sync
---------
The display advances to the next line by itself once a line is full, so a
source that fills every line completely must *not* also pulse hsync, or
each line would be skipped twice.  ``line_sync`` therefore defaults to on
only when the source is narrower than the display it drives.

Patterns
--------

========  ==============================================================
bars      eight vertical colour bars (white, yellow, cyan, green,
          magenta, red, blue, black)
gradient  red rises left to right, green top to bottom, blue constant
checker   8x8 black / white checkerboard
========  ==============================================================
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from vgasim.core.types import Sample

logger = logging.getLogger(__name__)

Rgb = tuple[int, int, int]

_BARS: tuple[Rgb, ...] = (
    (255, 255, 255),
    (255, 255, 0),
    (0, 255, 255),
    (0, 255, 0),
    (255, 0, 255),
    (255, 0, 0),
    (0, 0, 255),
    (0, 0, 0),
)


def _bars(x: int, y: int, width: int, height: int) -> Rgb:
    return _BARS[x * len(_BARS) // width]


def _gradient(x: int, y: int, width: int, height: int) -> Rgb:
    return (x * 255 // max(1, width - 1), y * 255 // max(1, height - 1), 128)


def _checker(x: int, y: int, width: int, height: int) -> Rgb:
    return (255, 255, 255) if ((x >> 3) ^ (y >> 3)) & 1 else (0, 0, 0)


PATTERNS: dict[str, Callable[[int, int, int, int], Rgb]] = {
    "bars": _bars,
    "gradient": _gradient,
    "checker": _checker,
}


class TestPatternSource:
    """Endless sample stream carrying a test pattern.

    Parameters
    ----------
    width, height:
        Active pixels per line and lines per frame.
    pattern:
        One of :data:`PATTERNS`.
    line_sync:
        Pulse hsync between lines.  See the module notes.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        width: int,
        height: int,
        pattern: str = "bars",
        line_sync: bool = False,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"pattern size must be positive, got {width}x{height}")
        if pattern not in PATTERNS:
            raise ValueError(
                f"unknown pattern {pattern!r}; choose from {', '.join(PATTERNS)}"
            )
        self.width: int = width
        self.height: int = height
        self.pattern: str = pattern
        self.line_sync: bool = line_sync
        self.frames: int = 0
        self._stream: Iterator[Sample] = self._generate()

        logger.debug(
            "TestPatternSource: %dx%d %s (line_sync=%s)",
            width,
            height,
            pattern,
            line_sync,
        )

    @classmethod
    def for_display(
        cls,
        display_width: int,
        display_height: int,
        pattern: str = "bars",
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> TestPatternSource:
        """Build a source for a display, picking ``line_sync`` to match."""
        width = display_width if width is None else width
        height = display_height if height is None else height
        return cls(width, height, pattern, line_sync=width < display_width)

    @property
    def samples_per_frame(self) -> int:
        lines = self.height * self.width + (self.height - 1 if self.line_sync else 0)
        return 2 * (1 + lines)

    def __iter__(self) -> Iterator[Sample]:
        return self._stream

    def __next__(self) -> Sample:
        return next(self._stream)

    def samples(self, count: int) -> Iterator[Sample]:
        """Yield the next *count* samples, continuing where the last call stopped."""
        for _ in range(count):
            yield next(self._stream)

    # ------------------------------------------------------------------
    # Generator
    # ------------------------------------------------------------------

    def _generate(self) -> Iterator[Sample]:
        color = PATTERNS[self.pattern]
        while True:
            yield from self._pulse(vsync=True)
            for y in range(self.height):
                if y and self.line_sync:
                    yield from self._pulse(hsync=True)
                for x in range(self.width):
                    r, g, b = color(x, y, self.width, self.height)
                    yield Sample(r, g, b, clock=False)
                    yield Sample(r, g, b, clock=True)
            self.frames += 1

    @staticmethod
    def _pulse(hsync: bool = False, vsync: bool = False) -> Iterator[Sample]:
        # The sync line must rise together with the clock to register.
        yield Sample(0, 0, 0, clock=False)
        yield Sample(0, 0, 0, hsync=hsync, vsync=vsync, clock=True)
