"""
SimulationContext -- one running evaluation of a circuit.

The context owns the per-display :class:`~vgasim.core.raster.RasterState`
objects, keyed by the display instance that drives them.  Display names are
labels only; two displays sharing a name still get separate states.  The
states' lifetime is the context's lifetime: dropping or resetting the
context drops every frame it holds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional

from vgasim.core.raster import RasterState

if TYPE_CHECKING:
    from vgasim.core.vga_display import VgaDisplay


class SimulationContext:
    """Holds the raster state for each display driven in this evaluation."""

    def __init__(self, name: str = "main") -> None:
        self.name: str = name
        self.raster_states: dict[VgaDisplay, RasterState] = {}

    def get_raster(self, display: VgaDisplay) -> Optional[RasterState]:
        return self.raster_states.get(display)

    def set_raster(self, display: VgaDisplay, state: RasterState) -> None:
        self.raster_states[display] = state

    def reset(self) -> None:
        """Discard all display state, as on a simulation reset."""
        self.raster_states.clear()

    def __iter__(self) -> Iterator[VgaDisplay]:
        return iter(self.raster_states)

    def __len__(self) -> int:
        return len(self.raster_states)

    def __repr__(self) -> str:
        names = sorted(display.name for display in self.raster_states)
        return f"SimulationContext(name={self.name!r}, displays={names})"
