"""Asset pipeline, asset loading and input handling for a small game engine."""

__version__ = "0.3.0"