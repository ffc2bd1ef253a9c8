"""Portable filesystem utilities: paths, traversal, text I/O and temp resources."""

__version__ = "0.1.0"
