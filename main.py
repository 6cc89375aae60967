#!/usr/bin/env python3
"""
vgasim -- VGA display simulator.

Launcher for running from a source checkout; see :mod:`vgasim.main` for
the command-line options.
"""

import os
import sys

# ---------------------------------------------------------------------------
# Ensure the project root is on sys.path so that ``vgasim`` can be imported
# regardless of how the script is invoked.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from vgasim.main import main


if __name__ == "__main__":
    sys.exit(main())
