"""Environmental sensor readings and device metadata service."""

__version__ = "1.0.0"
