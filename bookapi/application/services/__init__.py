"""Application services: authorization and validation."""

from bookapi.application.services.authorization_service import AuthorizationService
from bookapi.application.services.validator import Validator

__all__ = ["AuthorizationService", "Validator"]
