"""A small ray tracer that renders .rt scene files to PPM images."""

__version__ = "0.1.0"
__all__ = ["__version__"]