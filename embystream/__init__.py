"""Backend settings, caching, encrypted tokens and logging for an Emby streaming service."""

__version__ = "0.1.0"
__all__ = ["__version__"]