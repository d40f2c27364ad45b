"""HTTP clients for external services."""
from .board_client import BoardClient

__all__ = ["BoardClient"]
