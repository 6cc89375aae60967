"""
Display configuration: resolution and presentation scale.

The configuration is attached to the display definition, not to any
simulation state.  Each :class:`~vgasim.core.raster.RasterState` compares
itself against it on every access and resizes when they diverge.
"""

from __future__ import annotations

import logging
from typing import Callable

from vgasim.core.types import HEIGHT_OPTIONS, SCALE_OPTIONS, WIDTH_OPTIONS

logger = logging.getLogger(__name__)

# Listener signature: (attribute name, old value, new value).
ConfigListener = Callable[[str, int, int], None]

_OPTIONS: dict[str, tuple[int, ...]] = {
    "width": WIDTH_OPTIONS,
    "height": HEIGHT_OPTIONS,
    "scale": SCALE_OPTIONS,
}


class Configuration:
    """Resolution and scale of a VGA display.

    Parameters
    ----------
    width:
        Horizontal resolution, one of :data:`WIDTH_OPTIONS`.
    height:
        Vertical resolution, one of :data:`HEIGHT_OPTIONS`.
    scale:
        Integer presentation scale, one of :data:`SCALE_OPTIONS`.  Affects
        only the window size, never the frame buffer.
    strict:
        When false, any integer is accepted (custom resolutions for test
        benches); the core clamps dimensions below 1.

    Raises
    ------
    ValueError
        If *strict* and a value is not one of its enumerated options.
    """

    DEFAULT_WIDTH: int = 640
    DEFAULT_HEIGHT: int = 480
    DEFAULT_SCALE: int = 1

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        scale: int = DEFAULT_SCALE,
        strict: bool = True,
    ) -> None:
        self.strict: bool = strict
        self._values: dict[str, int] = {
            "width": self._validate("width", width),
            "height": self._validate("height", height),
            "scale": self._validate("scale", scale),
        }
        self._listeners: list[ConfigListener] = []

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._values["width"]

    @width.setter
    def width(self, value: int) -> None:
        self._set("width", value)

    @property
    def height(self) -> int:
        return self._values["height"]

    @height.setter
    def height(self, value: int) -> None:
        self._set("height", value)

    @property
    def scale(self) -> int:
        return self._values["scale"]

    @scale.setter
    def scale(self, value: int) -> None:
        self._set("scale", value)

    @property
    def resolution(self) -> tuple[int, int]:
        return self.width, self.height

    def display_size(self) -> tuple[int, int]:
        """Window size in screen pixels: resolution times scale."""
        return self.width * self.scale, self.height * self.scale

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: ConfigListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ConfigListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate(self, name: str, value: int) -> int:
        options = _OPTIONS[name]
        if self.strict and value not in options:
            raise ValueError(
                f"{name} must be one of {', '.join(map(str, options))}; got {value}"
            )
        return int(value)

    def _set(self, name: str, value: int) -> None:
        value = self._validate(name, value)
        old = self._values[name]
        if old == value:
            return
        self._values[name] = value
        logger.debug("Configuration %s: %d -> %d", name, old, value)
        for listener in list(self._listeners):
            listener(name, old, value)

    def __repr__(self) -> str:
        return (
            f"Configuration(width={self.width}, height={self.height}, "
            f"scale={self.scale})"
        )
