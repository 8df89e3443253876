"""Entity validator backed by pydantic constraint models.

Each entity type is registered with a constraints model (from_attributes);
validating an entity runs the model over its attributes and turns pydantic
errors into violations.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from bookapi.application.dtos.violation import Violation


class Validator:
    """Validate entities against their registered constraints model."""

    def __init__(self, constraints: Mapping[type, type[BaseModel]]) -> None:
        self._constraints = dict(constraints)

    def validate(self, entity: Any) -> list[Violation]:
        """Return the violations of entity; empty when valid.

        Raises:
            LookupError: If no constraints model is registered for the entity type.
        """
        model = self._constraints_for(type(entity))
        try:
            model.model_validate(entity, from_attributes=True)
        except ValidationError as e:
            return [
                Violation(
                    property_path=".".join(str(part) for part in err["loc"]),
                    message=err["msg"],
                )
                for err in e.errors(include_url=False)
            ]
        return []

    def _constraints_for(self, entity_type: type) -> type[BaseModel]:
        for klass in entity_type.__mro__:
            model = self._constraints.get(klass)
            if model is not None:
                return model
        raise LookupError(f"No constraints registered for {entity_type.__name__}")
