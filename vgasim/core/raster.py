"""
RasterState -- write cursor, frame store and resize policy.

A :class:`RasterState` belongs to one display in one
:class:`~vgasim.core.context.SimulationContext`.  It reconstructs the
picture from the edge detector's verdicts:

* ``VERTICAL_RETRACE``   -- cursor to (0, 0)
* ``HORIZONTAL_RETRACE`` -- cursor to the start of the next line
* ``ACTIVE_PIXEL``       -- write at the cursor, then advance; a full line
  wraps to the next one even if no hsync arrived
* ``NO_OP``              -- nothing

Sync pulses are authoritative for positioning; the auto-wrap only keeps
the cursor inside the buffer.
"""

from __future__ import annotations

import logging

from vgasim.core.edge_detector import EdgeDetector
from vgasim.core.frame_buffer import FrameBuffer
from vgasim.core.sample_codec import pack_rgb
from vgasim.core.types import Decision, DecisionKind, Sample

logger = logging.getLogger(__name__)


class RasterState:
    """Cursor, frame buffer and edge latches for one display instance.

    Parameters
    ----------
    width, height:
        Requested resolution.  Values below 1 are clamped to 1.

    Invariants after every completed :meth:`apply`:
    ``0 <= x < width``, ``0 <= y < height`` and the frame buffer is
    exactly ``width`` x ``height``.
    """

    def __init__(self, width: int, height: int) -> None:
        self.detector: EdgeDetector = EdgeDetector()
        self.width: int = 1
        self.height: int = 1
        self.frame: FrameBuffer = FrameBuffer(1, 1)
        self.x: int = 0
        self.y: int = 0
        self.resize(width, height)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> tuple[int, int]:
        return self.x, self.y

    # ------------------------------------------------------------------
    # Resize policy
    # ------------------------------------------------------------------

    def resize(self, width: int, height: int) -> None:
        """Reallocate a black buffer of the given size and home the cursor.

        Previous contents are dropped, not migrated.
        """
        self.width = max(1, width)
        self.height = max(1, height)
        self.frame = FrameBuffer(self.width, self.height)
        self.x = 0
        self.y = 0

    def reconcile(self, width: int, height: int) -> bool:
        """Resize only if the configured size differs from the current one.

        Returns:
            ``True`` if the buffer was reallocated.
        """
        width = max(1, width)
        height = max(1, height)
        if width == self.width and height == self.height:
            return False
        logger.info(
            "Raster resize %dx%d -> %dx%d", self.width, self.height, width, height
        )
        self.resize(width, height)
        return True

    # ------------------------------------------------------------------
    # Tick path
    # ------------------------------------------------------------------

    def tick(self, sample: Sample) -> Decision:
        """Run one sample through the edge detector and apply the verdict."""
        decision = self.detector.observe(sample)
        self.apply(decision)
        return decision

    def apply(self, decision: Decision) -> None:
        kind = decision.kind
        if kind == DecisionKind.VERTICAL_RETRACE:
            self.x = 0
            self.y = 0
        elif kind == DecisionKind.HORIZONTAL_RETRACE:
            self.x = 0
            self._next_line()
        elif kind == DecisionKind.ACTIVE_PIXEL:
            if 0 <= self.x < self.width and 0 <= self.y < self.height:
                self.frame.write_pixel(
                    self.x,
                    self.y,
                    pack_rgb(decision.red, decision.green, decision.blue),
                )
            self.x += 1
            if self.x >= self.width:
                self.x = 0
                self._next_line()

    def _next_line(self) -> None:
        self.y += 1
        if self.y >= self.height:
            self.y = 0

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"RasterState({self.width}x{self.height}, "
            f"cursor=({self.x}, {self.y}), {self.detector!r})"
        )
