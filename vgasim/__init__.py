"""vgasim -- VGA display simulator."""

__version__ = "1.0.0"
