"""Photographic filter engine for 8-bit RGBA pixel buffers."""

__version__ = "0.1.0"
