"""Observability – structured logging helpers."""
from oidc_metadata.observability.logging.factory import configure_logging
from oidc_metadata.observability.logging.processors import get_logger

__all__ = ["configure_logging", "get_logger"]
