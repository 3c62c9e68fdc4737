"""Parse and render the typed content blocks embedded in lesson text."""

__version__ = "0.1.0"
