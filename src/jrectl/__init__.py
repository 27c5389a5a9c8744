"""jrectl — minimized Java runtime image builder."""

__version__ = "0.1.0"
