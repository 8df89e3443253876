"""Application DTOs (no dependency on ORM or HTTP)."""

from bookapi.application.dtos.principal import Principal
from bookapi.application.dtos.violation import Violation

__all__ = ["Principal", "Violation"]
