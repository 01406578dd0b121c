"""Map-matching service integration."""

from .client import OsrmClient
from .session import create_session

__all__ = ["OsrmClient", "create_session"]
