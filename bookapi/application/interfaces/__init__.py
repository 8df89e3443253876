"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from bookapi.infrastructure or bookapi.api.
"""

from bookapi.application.interfaces.repositories import (
    IResourceRepository,
    IUserRepository,
)
from bookapi.application.interfaces.services import (
    ISerializer,
    ITaggedCache,
    IValidator,
)

__all__ = [
    "IResourceRepository",
    "ISerializer",
    "ITaggedCache",
    "IUserRepository",
    "IValidator",
]
