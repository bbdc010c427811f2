"""Command dispatch engine with plugins and an agent tool adapter."""

__version__ = "1.0.0"
