"""propbind — declarative property binding and validation for plugin configuration."""

__version__ = "0.1.0"
