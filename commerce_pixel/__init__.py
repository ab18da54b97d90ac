"""Storefront lifecycle events normalized and forwarded to an analytics sink."""

__version__ = "0.1.0"
