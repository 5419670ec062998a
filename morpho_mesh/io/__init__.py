"""I/O functions for saving and loading morphology trees."""

from .serialize import save_json, load_json

__all__ = ["save_json", "load_json"]
