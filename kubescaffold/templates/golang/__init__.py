"""Go source builders: the manager entry point and API types."""

from .main import Main, MainUpdater
from .types import Types

__all__ = ["Main", "MainUpdater", "Types"]
