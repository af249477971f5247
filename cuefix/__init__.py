"""Rewrite .wav references in CUE sheets to the companion audio files next to them."""

__version__ = "0.1.0"
