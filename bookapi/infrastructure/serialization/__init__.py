"""Serialization: group/version-filtered JSON rendering of entities.

The entity -> projection registry is assembled in the composition root
(bookapi.api.v1.dependencies).
"""

from bookapi.infrastructure.serialization.exposure import exposed, is_exposed
from bookapi.infrastructure.serialization.serializer import Serializer

__all__ = ["Serializer", "exposed", "is_exposed"]
