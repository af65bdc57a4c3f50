"""HTTP surface of the bridge."""

from .app import create_app

__all__ = ["create_app"]
