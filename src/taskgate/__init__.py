"""taskgate — dependency-gated task registry."""

from taskgate.config import VERSION as __version__

__all__ = ["__version__"]
