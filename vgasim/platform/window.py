"""
Main application window for the VGA display simulator.
Uses pygame to show the reconstructed frame while feeding samples from a
signal source into the display.

Typical usage::

    from vgasim.platform.window import Window

    display = VgaDisplay("vga", Configuration(640, 480, 2))
    source = TestPatternSource.for_display(640, 480)
    window = Window(display, source)
    window.run()

Keys
----

==========  ==========================================
Escape      Quit
P           Pause / resume the simulation
1-4         Change the display scale
R           Reset the simulation context (blank frame)
==========  ==========================================
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, Iterator, Optional

import pygame

from vgasim.core.context import SimulationContext
from vgasim.core.types import Sample
from vgasim.core.vga_display import VgaDisplay
from vgasim.shell.frame_renderer import FrameRenderer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_TITLE: str = "vgasim"

_DEFAULT_FPS: int = 30

_SCALE_KEYS: dict[int, int] = {
    pygame.K_1: 1,
    pygame.K_2: 2,
    pygame.K_3: 3,
    pygame.K_4: 4,
}


class Window:
    """Pygame window that owns the simulation main loop.

    Parameters
    ----------
    display:
        The VGA display to drive and show.
    source:
        Iterable of :class:`Sample` values; consumed lazily.
    samples_per_frame:
        Samples fed to the display between two redraws.  A value smaller
        than a full frame shows the raster being drawn progressively.
    fps:
        Redraw rate.
    context:
        Simulation context to run in.  A fresh one is created if omitted.
    """

    def __init__(
        self,
        display: VgaDisplay,
        source: Iterable[Sample],
        samples_per_frame: int = 20_000,
        *,
        fps: int = _DEFAULT_FPS,
        context: Optional[SimulationContext] = None,
    ) -> None:
        # ---- basic state -------------------------------------------------
        self._display = display
        self._source: Iterator[Sample] = iter(source)
        self._samples_per_frame: int = max(1, samples_per_frame)
        self._fps: int = max(1, fps)
        self._context: SimulationContext = context if context is not None else SimulationContext()
        self._running: bool = False
        self._paused: bool = False
        self._ticks: int = 0

        # ---- init pygame display -----------------------------------------
        if not pygame.get_init():
            pygame.init()

        self._screen: pygame.Surface = pygame.display.set_mode(
            display.config.display_size(), pygame.RESIZABLE
        )
        pygame.display.set_caption(self._build_title())

        self._clock: pygame.time.Clock = pygame.time.Clock()

        # ---- subsystems --------------------------------------------------
        self._frame_renderer: FrameRenderer = FrameRenderer(display, self._context)
        display.config.add_listener(self._config_changed)

        # ---- performance counters ----------------------------------------
        self._frame_count: int = 0
        self._fps_update_time: float = 0.0
        self._fps_display: float = 0.0

        width, height = display.config.display_size()
        logger.info(
            "Window: %dx%d native, %dx%d display (scale=%d, %d fps, %d samples/frame)",
            display.config.width,
            display.config.height,
            width,
            height,
            display.config.scale,
            self._fps,
            self._samples_per_frame,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, value: bool) -> None:
        self._paused = value

    @property
    def context(self) -> SimulationContext:
        return self._context

    @property
    def ticks(self) -> int:
        """Total samples delivered so far."""
        return self._ticks

    @property
    def fps(self) -> float:
        """The measured frames-per-second (updated once per second)."""
        return self._fps_display

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Enter the main loop.

        Blocks until the window is closed or Escape is pressed; an exhausted
        source only pauses the simulation.  Each iteration:

        1. Handles pending window / keyboard events.
        2. Feeds ``samples_per_frame`` samples to the display.
        3. Renders the frame buffer, scaled to the window.
        4. Throttles to the target frame rate.
        """
        self._running = True
        self._fps_update_time = time.monotonic()
        self._frame_count = 0

        logger.info("Entering main loop (target %d fps)", self._fps)

        try:
            while self._running:
                self._tick()
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
        finally:
            self._shutdown()

    # ------------------------------------------------------------------
    # Per-frame tick
    # ------------------------------------------------------------------

    def _tick(self) -> None:
        """Execute one iteration of the main loop."""
        # ---- input -------------------------------------------------------
        for event in pygame.event.get():
            self._handle_event(event)
        if not self._running:
            return

        # ---- simulation --------------------------------------------------
        if not self._paused:
            delivered = 0
            for sample in self._source:
                self._display.propagate(self._context, sample)
                delivered += 1
                if delivered >= self._samples_per_frame:
                    break
            self._ticks += delivered
            if delivered < self._samples_per_frame:
                logger.info("Signal source exhausted after %d samples", self._ticks)
                self._paused = True

        # ---- video -------------------------------------------------------
        surface = self._frame_renderer.render()

        current_size = self._screen.get_size()
        if surface.get_size() != current_size:
            scaled = pygame.transform.scale(surface, current_size)
        else:
            scaled = surface
        self._screen.blit(scaled, (0, 0))
        pygame.display.flip()

        # ---- timing ------------------------------------------------------
        self._clock.tick(self._fps)
        self._update_fps()

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self._running = False
            elif event.key == pygame.K_p:
                self._paused = not self._paused
                logger.info("Paused" if self._paused else "Resumed")
            elif event.key == pygame.K_r:
                logger.info("Resetting simulation context")
                self._context.reset()
            elif event.key in _SCALE_KEYS:
                self._display.config.scale = _SCALE_KEYS[event.key]

    def _config_changed(self, name: str, old: int, new: int) -> None:
        self._screen = pygame.display.set_mode(
            self._display.config.display_size(), pygame.RESIZABLE
        )

    # ------------------------------------------------------------------
    # FPS tracking
    # ------------------------------------------------------------------

    def _update_fps(self) -> None:
        """Update the displayed FPS counter roughly once per second."""
        self._frame_count += 1
        now = time.monotonic()
        elapsed = now - self._fps_update_time
        if elapsed >= 1.0:
            self._fps_display = self._frame_count / elapsed
            self._frame_count = 0
            self._fps_update_time = now
            pygame.display.set_caption(
                f"{self._build_title()}  [{self._fps_display:.1f} fps]"
            )

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def _shutdown(self) -> None:
        """Clean up all subsystems."""
        logger.info("Shutting down")
        self._display.config.remove_listener(self._config_changed)
        pygame.quit()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _build_title(self) -> str:
        config = self._display.config
        return f"{_WINDOW_TITLE}  ({self._display.name} {config.width}x{config.height})"
