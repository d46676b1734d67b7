"""Observability – structured logging for the cache and its sweeper."""
from oidc_metadata.observability.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
