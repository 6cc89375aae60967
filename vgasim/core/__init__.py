# vgasim simulation core
"""
Signal sampling and raster reconstruction for a VGA output peripheral.

Use :class:`VgaDisplay` with a :class:`SimulationContext` to turn clocked
RGB / hsync / vsync samples into a frame buffer.
"""

from vgasim.core.configuration import Configuration
from vgasim.core.context import SimulationContext
from vgasim.core.edge_detector import EdgeDetector
from vgasim.core.frame_buffer import FrameBuffer
from vgasim.core.raster import RasterState
from vgasim.core.sample_codec import pack_rgb, to_channel, to_level, unpack_rgb
from vgasim.core.types import (
    HEIGHT_OPTIONS,
    HORIZONTAL_RETRACE,
    NO_OP,
    SCALE_OPTIONS,
    VERTICAL_RETRACE,
    WIDTH_OPTIONS,
    Decision,
    DecisionKind,
    Pin,
    Sample,
)
from vgasim.core.vga_display import VgaDisplay

__all__ = [
    "Configuration",
    "SimulationContext",
    "EdgeDetector",
    "FrameBuffer",
    "RasterState",
    "VgaDisplay",
    # values
    "Decision",
    "DecisionKind",
    "Pin",
    "Sample",
    "NO_OP",
    "VERTICAL_RETRACE",
    "HORIZONTAL_RETRACE",
    # options
    "WIDTH_OPTIONS",
    "HEIGHT_OPTIONS",
    "SCALE_OPTIONS",
    # codec
    "pack_rgb",
    "to_channel",
    "to_level",
    "unpack_rgb",
]
