"""Shared cross-cutting helpers (logging). No business logic."""

from bookapi.shared.logging import setup_logging

__all__ = ["setup_logging"]
