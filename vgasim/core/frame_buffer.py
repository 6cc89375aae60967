"""
FrameBuffer -- the reconstructed picture.

One ``uint32`` per pixel holding a packed 24-bit ``0xRRGGBB`` value, laid
out row-major so that ``pixels[y, x]`` is column *x* of scanline *y*.  A
freshly allocated buffer is all zero (black).

The buffer is written only by the tick path.  A presentation thread may
read it at any time through :meth:`FrameBuffer.snapshot`; each pixel write
is a single element store, so a reader sees either the old or the new value
of a cell, but a frame read mid-scan can mix two frames.
"""

from __future__ import annotations

import numpy as np


class FrameBuffer:
    """A width x height grid of packed RGB pixels.

    Parameters
    ----------
    width:
        Pixels per scanline.
    height:
        Number of scanlines.
    """

    DTYPE = np.uint32

    def __init__(self, width: int, height: int) -> None:
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        if height <= 0:
            raise ValueError(f"height must be positive, got {height}")

        self.width: int = width
        self.height: int = height
        self.pixels: np.ndarray = np.zeros((height, width), dtype=self.DTYPE)

    # ------------------------------------------------------------------
    # Pixel access
    # ------------------------------------------------------------------

    @property
    def size(self) -> tuple[int, int]:
        """``(width, height)`` of the buffer."""
        return self.width, self.height

    def write_pixel(self, x: int, y: int, rgb: int) -> None:
        """Store a packed ``0xRRGGBB`` value at column *x* of scanline *y*."""
        self.pixels[y, x] = rgb & 0xFFFFFF

    def read_pixel(self, x: int, y: int) -> int:
        """Return the packed ``0xRRGGBB`` value at (*x*, *y*).

        Raises:
            IndexError: If the coordinates are outside the buffer.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) out of range for {self.width}x{self.height}"
            )
        return int(self.pixels[y, x])

    def snapshot(self, copy: bool = False) -> np.ndarray:
        """Return the pixel grid for presentation.

        By default this is a read-only view that keeps tracking later
        writes.  Pass ``copy=True`` for a frozen, independent copy.
        """
        if copy:
            return self.pixels.copy()
        view = self.pixels.view()
        view.flags.writeable = False
        return view

    def clear(self) -> None:
        """Blank the whole buffer to black."""
        self.pixels.fill(0)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"FrameBuffer(width={self.width}, height={self.height})"
