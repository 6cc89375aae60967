"""
Edge detector for the pixel clock and the two sync lines.

Every observed sample is classified into exactly one :class:`Decision`:

1. no clock rising edge                      -> ``NO_OP``
2. clock edge, vsync just rose               -> ``VERTICAL_RETRACE``
3. clock edge, hsync just rose               -> ``HORIZONTAL_RETRACE``
4. clock edge, neither sync line asserted    -> ``ACTIVE_PIXEL``
5. clock edge, a sync line held from before  -> ``NO_OP``

The three latches are updated after every observation, whatever the
verdict, so an edge is seen exactly once.
"""

from __future__ import annotations

from vgasim.core.sample_codec import to_channel
from vgasim.core.types import (
    HORIZONTAL_RETRACE,
    NO_OP,
    VERTICAL_RETRACE,
    Decision,
    Sample,
)


class EdgeDetector:
    """Latches the previous clock / hsync / vsync levels."""

    __slots__ = ("prev_clock", "prev_hsync", "prev_vsync")

    def __init__(self) -> None:
        self.prev_clock: bool = False
        self.prev_hsync: bool = False
        self.prev_vsync: bool = False

    def reset(self) -> None:
        self.prev_clock = False
        self.prev_hsync = False
        self.prev_vsync = False

    def observe(self, sample: Sample) -> Decision:
        """Classify *sample* and latch its levels for the next call."""
        decision = self._classify(sample)
        self.prev_clock = sample.clock
        self.prev_hsync = sample.hsync
        self.prev_vsync = sample.vsync
        return decision

    def _classify(self, sample: Sample) -> Decision:
        if not sample.clock or self.prev_clock:
            return NO_OP
        if sample.vsync and not self.prev_vsync:
            return VERTICAL_RETRACE
        if sample.hsync and not self.prev_hsync:
            return HORIZONTAL_RETRACE
        if not sample.hsync and not sample.vsync:
            return Decision.active_pixel(
                to_channel(sample.red),
                to_channel(sample.green),
                to_channel(sample.blue),
            )
        # Mid-retrace: a sync line is still held high.
        return NO_OP

    def __repr__(self) -> str:
        return (
            f"EdgeDetector(clock={self.prev_clock}, "
            f"hsync={self.prev_hsync}, vsync={self.prev_vsync})"
        )
