"""Batch commands into bulks and log them from a pool of worker threads."""

__version__ = "0.0.1"
__all__ = ["__version__"]