"""typectl — member type definition store."""

__version__ = "0.4.0"
