"""
VgaDisplay -- the VGA output peripheral.

The display is a definition (name + :class:`Configuration`); all mutable
state lives in a :class:`RasterState` owned by each
:class:`SimulationContext` it runs in.  The state is created lazily on the
first access for a context, using the configuration current at that time,
and is reconciled against the configuration on every access so that a
resolution change takes effect on the next tick or snapshot.

Typical usage::

    display = VgaDisplay("vga0", Configuration(640, 480))
    context = SimulationContext()
    for sample in source:
        display.propagate(context, sample)
    pixels = display.snapshot(context)
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

import numpy as np

from vgasim.core.configuration import Configuration
from vgasim.core.context import SimulationContext
from vgasim.core.raster import RasterState
from vgasim.core.types import Decision, Pin, Sample

logger = logging.getLogger(__name__)


class VgaDisplay:
    """Signal-to-raster peripheral.

    Parameters
    ----------
    name:
        Label used in logs and window titles.  The raster state in each
        context is keyed by the display instance, not by this name.
    config:
        Resolution / scale.  Defaults to 640x480 at scale 1.  The display
        listens for changes until :meth:`close` is called.
    """

    PINS: tuple[Pin, ...] = tuple(Pin)

    def __init__(self, name: str = "vga", config: Optional[Configuration] = None) -> None:
        self.name: str = name
        self.config: Configuration = config if config is not None else Configuration()
        self.config.add_listener(self._config_changed)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def get_state(self, context: SimulationContext) -> RasterState:
        """Return this display's raster state in *context*, creating or
        resizing it to match the current configuration."""
        width, height = self.config.resolution
        state = context.get_raster(self)
        if state is None:
            state = RasterState(width, height)
            context.set_raster(self, state)
            logger.info(
                "%s: created %dx%d raster in context %r",
                self.name,
                state.width,
                state.height,
                context.name,
            )
        else:
            state.reconcile(width, height)
        return state

    # ------------------------------------------------------------------
    # Tick path
    # ------------------------------------------------------------------

    def propagate(self, context: SimulationContext, sample: Sample) -> Decision:
        """Deliver one sample (one propagation step)."""
        return self.get_state(context).tick(sample)

    def propagate_pins(
        self, context: SimulationContext, pins: Mapping[str, Any]
    ) -> Decision:
        """Deliver one step from raw pin values keyed by pin name."""
        return self.propagate(context, Sample.from_pins(pins))

    def feed(self, context: SimulationContext, samples: Iterable[Sample]) -> int:
        """Deliver a run of samples in order.

        Returns:
            The number of samples delivered.
        """
        count = 0
        for sample in samples:
            self.get_state(context).tick(sample)
            count += 1
        return count

    # ------------------------------------------------------------------
    # Presentation path
    # ------------------------------------------------------------------

    def snapshot(self, context: SimulationContext, copy: bool = False) -> np.ndarray:
        """Return the ``(height, width)`` grid of packed ``0xRRGGBB`` pixels.

        The grid always matches the current configuration.  Without
        *copy* it is a read-only view that reflects later ticks.
        """
        return self.get_state(context).frame.snapshot(copy=copy)

    @staticmethod
    def tooltip(pin: int) -> str:
        try:
            return Pin(pin).tooltip
        except ValueError:
            return f"Pin {pin + 1}"

    def close(self) -> None:
        """Stop listening to the configuration.

        Raster states already created stay in their contexts and are still
        reconciled on access; only the change logging stops.
        """
        self.config.remove_listener(self._config_changed)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _config_changed(self, name: str, old: int, new: int) -> None:
        if name in ("width", "height"):
            logger.info(
                "%s: resolution %s changed %d -> %d, applies on next access",
                self.name,
                name,
                old,
                new,
            )

    def __repr__(self) -> str:
        return f"VgaDisplay(name={self.name!r}, {self.config!r})"
