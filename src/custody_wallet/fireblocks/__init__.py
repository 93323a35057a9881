"""Fireblocks REST API client."""

from .client import FireblocksClient
from .config import FireblocksConfig

__all__ = ["FireblocksClient", "FireblocksConfig"]
