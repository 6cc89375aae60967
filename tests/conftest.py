"""Shared fixtures for the vgasim test suite."""

from __future__ import annotations

from typing import Callable

import pytest

from vgasim.core.configuration import Configuration
from vgasim.core.context import SimulationContext
from vgasim.core.types import Decision, Sample
from vgasim.core.vga_display import VgaDisplay


@pytest.fixture
def context() -> SimulationContext:
    return SimulationContext()


@pytest.fixture
def display() -> VgaDisplay:
    return VgaDisplay("vga", Configuration(320, 240))


@pytest.fixture
def clock_in() -> Callable[..., Decision]:
    """Deliver one full clock cycle: a low sample, then a rising one.

    Returns the decision of the rising sample.  Sync levels apply only to
    the rising sample, so a sync line given here always rises with the
    clock.
    """

    def _clock_in(
        display: VgaDisplay,
        context: SimulationContext,
        rgb: tuple = (0, 0, 0),
        hsync: bool = False,
        vsync: bool = False,
    ) -> Decision:
        display.propagate(context, Sample(*rgb, clock=False))
        return display.propagate(context, Sample(*rgb, hsync=hsync, vsync=vsync, clock=True))

    return _clock_in
