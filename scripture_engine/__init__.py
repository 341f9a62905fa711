"""Scripture reader engine: reference resolution, verse merging and AI gateway."""

__version__ = "0.1.0"
