"""Cell and configuration types."""

from .box import Box
from .configuration import Configuration

__all__ = ["Box", "Configuration"]
