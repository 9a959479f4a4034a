"""HTTP client for the upstream campus backend."""

from .backend import BackendClient

__all__ = ["BackendClient"]
