"""HTTP ingest surface for storefront lifecycle events."""

from .app import create_app

__all__ = ["create_app"]
