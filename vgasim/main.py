"""
vgasim -- VGA display simulator.

Command-line entry point.  Builds a display from the requested
configuration, drives it with a test-pattern signal and shows the result in
a pygame window, or runs headless and saves a screenshot.

Usage examples::

    # Colour bars at 640x480, shown at 2x
    python main.py --scale 2

    # Gradient at 320x240, drawn progressively
    python main.py -W 320 -H 240 --pattern gradient --samples-per-frame 5000

    # Two frames without a window, saved as PNG
    python main.py --headless 2 --screenshot frame.png

    # Show configuration and pin table and exit
    python main.py --info
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from vgasim.core.configuration import Configuration
from vgasim.core.context import SimulationContext
from vgasim.core.types import HEIGHT_OPTIONS, SCALE_OPTIONS, WIDTH_OPTIONS, Pin
from vgasim.core.vga_display import VgaDisplay
from vgasim.platform.window import Window
from vgasim.shell.frame_renderer import FrameRenderer
from vgasim.shell.signal_source import PATTERNS, TestPatternSource


# ---------------------------------------------------------------------------
# CLI definition
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    parser = argparse.ArgumentParser(
        prog="vgasim",
        description=(
            "VGA display simulator.  Reconstructs a raster from clocked "
            "RGB / hsync / vsync samples and shows it in a pygame window."
        ),
    )

    # Display configuration
    parser.add_argument(
        "--width", "-W",
        type=int,
        choices=WIDTH_OPTIONS,
        default=Configuration.DEFAULT_WIDTH,
        help="Horizontal resolution.  Default: %(default)s.",
    )
    parser.add_argument(
        "--height", "-H",
        type=int,
        choices=HEIGHT_OPTIONS,
        default=Configuration.DEFAULT_HEIGHT,
        help="Vertical resolution.  Default: %(default)s.",
    )
    parser.add_argument(
        "--scale", "-s",
        type=int,
        choices=SCALE_OPTIONS,
        default=Configuration.DEFAULT_SCALE,
        help="Display scale factor.  Default: %(default)s.",
    )

    # Signal source
    parser.add_argument(
        "--pattern", "-p",
        choices=sorted(PATTERNS),
        default="bars",
        help="Test pattern to generate.  Default: %(default)s.",
    )
    parser.add_argument(
        "--source-width",
        type=int,
        default=None,
        metavar="N",
        help=(
            "Active pixels per line in the generated signal (defaults to the "
            "display width).  A narrower source pulses hsync between lines."
        ),
    )
    parser.add_argument(
        "--source-height",
        type=int,
        default=None,
        metavar="N",
        help="Lines per frame in the generated signal (defaults to the display height).",
    )

    # Run control
    parser.add_argument(
        "--samples-per-frame",
        type=int,
        default=None,
        metavar="N",
        help="Samples delivered between redraws.  Default: one full source frame.",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Window redraw rate.  Default: %(default)s.",
    )
    parser.add_argument(
        "--headless",
        type=int,
        default=None,
        metavar="FRAMES",
        help="Run FRAMES source frames without opening a window.",
    )
    parser.add_argument(
        "--screenshot",
        default=None,
        metavar="PATH",
        help="With --headless, save the final frame to PATH (PNG/BMP/TGA by extension).",
    )

    # Debugging / info
    parser.add_argument(
        "--info",
        action="store_true",
        default=False,
        help="Print the display configuration and pin table and exit.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG).",
    )

    return parser


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def _configure_logging(verbosity: int) -> None:
    """Set up the root logger based on requested verbosity."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ---------------------------------------------------------------------------
# Info mode
# ---------------------------------------------------------------------------

def _print_info(display: VgaDisplay) -> None:
    """Print the display configuration and pin table."""
    config = display.config
    width, height = config.display_size()
    print("vgasim display")
    print("=" * 40)
    print(f"  {'Name':20s}: {display.name}")
    print(f"  {'Resolution':20s}: {config.width}x{config.height}")
    print(f"  {'Scale':20s}: {config.scale}")
    print(f"  {'Window Size':20s}: {width}x{height}")
    print("-" * 40)
    for pin in Pin:
        print(f"  {pin.key:6s} {pin.bit_width:2d} bit  {pin.tooltip}")
    print("=" * 40)


# ---------------------------------------------------------------------------
# Headless mode
# ---------------------------------------------------------------------------

def _run_headless(
    display: VgaDisplay,
    source: TestPatternSource,
    frames: int,
    screenshot: Optional[str],
) -> int:
    """Drive *frames* source frames into the display without a window."""
    logger = logging.getLogger("vgasim.main")
    context = SimulationContext()
    count = display.feed(context, source.samples(frames * source.samples_per_frame))
    state = display.get_state(context)
    logger.info("Delivered %d samples; cursor at %s", count, state.cursor)

    if screenshot:
        FrameRenderer(display, context).save(screenshot)
        print(f"Saved {display.config.width}x{display.config.height} frame to {screenshot}")
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` to use ``sys.argv``.

    Returns
    -------
    int
        Exit code (0 on success).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.headless is not None and args.headless < 1:
        parser.error(f"--headless FRAMES must be at least 1; got {args.headless}")

    _configure_logging(args.verbose)
    logger = logging.getLogger("vgasim.main")

    display = VgaDisplay("vga", Configuration(args.width, args.height, args.scale))

    if args.info:
        _print_info(display)
        return 0

    try:
        source = TestPatternSource.for_display(
            args.width,
            args.height,
            pattern=args.pattern,
            width=args.source_width,
            height=args.source_height,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    samples_per_frame = args.samples_per_frame or source.samples_per_frame

    if args.headless is not None:
        try:
            return _run_headless(display, source, args.headless, args.screenshot)
        except Exception as exc:
            logger.exception("Headless run failed")
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    logger.info("Starting simulation ...")
    try:
        window = Window(display, source, samples_per_frame, fps=args.fps)
        window.run()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        logger.exception("Fatal error during simulation")
        print(f"Fatal error: {exc}", file=sys.stderr)
        return 1

    logger.info("Exited cleanly")
    return 0


if __name__ == "__main__":
    sys.exit(main())
