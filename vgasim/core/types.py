"""
Core enumerations and value types for the VGA display model.

A :class:`Sample` is what the hosting simulation delivers once per
propagation step; a :class:`Decision` is what the edge detector makes of it.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Mapping, NamedTuple

from vgasim.core.sample_codec import to_level


# Enumerated configuration options.
WIDTH_OPTIONS: tuple[int, ...] = (320, 640, 800, 1024, 1280, 1920)
HEIGHT_OPTIONS: tuple[int, ...] = (240, 480, 600, 768, 1024, 1080)
SCALE_OPTIONS: tuple[int, ...] = (1, 2, 3, 4)


class Pin(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2
    HSYNC = 3
    VSYNC = 4
    CLK = 5

    @property
    def key(self) -> str:
        """Pin name as used in pin-value mappings (``red`` .. ``clk``)."""
        return self.name.lower()

    @property
    def bit_width(self) -> int:
        return 8 if self <= Pin.BLUE else 1

    @property
    def tooltip(self) -> str:
        return _PIN_TOOLTIPS[self]


_PIN_TOOLTIPS = {
    Pin.RED: "Red channel (8 bits)",
    Pin.GREEN: "Green channel (8 bits)",
    Pin.BLUE: "Blue channel (8 bits)",
    Pin.HSYNC: "Horizontal sync",
    Pin.VSYNC: "Vertical sync",
    Pin.CLK: "Pixel clock",
}


class DecisionKind(IntEnum):
    NO_OP = 0
    VERTICAL_RETRACE = 1
    HORIZONTAL_RETRACE = 2
    ACTIVE_PIXEL = 3


class Decision(NamedTuple):
    """Verdict of one edge-detector observation.

    Only :attr:`DecisionKind.ACTIVE_PIXEL` decisions carry meaningful
    channel values; the others leave them at zero.
    """

    kind: DecisionKind
    red: int = 0
    green: int = 0
    blue: int = 0

    @classmethod
    def active_pixel(cls, red: int, green: int, blue: int) -> Decision:
        return cls(DecisionKind.ACTIVE_PIXEL, red, green, blue)


NO_OP = Decision(DecisionKind.NO_OP)
VERTICAL_RETRACE = Decision(DecisionKind.VERTICAL_RETRACE)
HORIZONTAL_RETRACE = Decision(DecisionKind.HORIZONTAL_RETRACE)


class Sample(NamedTuple):
    """One tick's worth of input levels.

    The colour channels are raw and may be ``None`` (undefined); the sync
    and clock lines are already resolved to booleans.
    """

    red: Any = None
    green: Any = None
    blue: Any = None
    hsync: bool = False
    vsync: bool = False
    clock: bool = False

    @classmethod
    def from_pins(cls, pins: Mapping[str, Any]) -> Sample:
        """Build a sample from raw pin values keyed by :attr:`Pin.key`.

        Missing pins are undefined.  Sync and clock lines are high only for
        a defined logic one.
        """
        return cls(
            red=pins.get(Pin.RED.key),
            green=pins.get(Pin.GREEN.key),
            blue=pins.get(Pin.BLUE.key),
            hsync=to_level(pins.get(Pin.HSYNC.key)),
            vsync=to_level(pins.get(Pin.VSYNC.key)),
            clock=to_level(pins.get(Pin.CLK.key)),
        )
