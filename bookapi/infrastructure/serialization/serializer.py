"""JSON serializer filtered by groups and API version.

Entities (ORM objects) are rendered through their registered projection
schema; pydantic models are rendered directly. Only fields exposed for the
requested groups and version are emitted.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from bookapi.domain.exceptions import DeserializationException
from bookapi.infrastructure.serialization.exposure import is_exposed

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class Serializer:
    """Render entities to JSON and decode request bodies into payload models."""

    def __init__(self, projections: Mapping[type, type[BaseModel]]) -> None:
        """Initialize with the entity type -> projection schema registry.

        Args:
            projections: Projection schema for each entity type (from_attributes models).
        """
        self._projections = dict(projections)

    def serialize(
        self,
        value: Any,
        groups: Iterable[str],
        version: str | None = None,
    ) -> str:
        """Return value as a JSON string, keeping only fields exposed for groups/version.

        Args:
            value: Entity, pydantic model, sequence or mapping of those, or plain data.
            groups: Serialization groups (e.g. ['getAuthors']).
            version: Optional API version (e.g. '2.0').

        Returns:
            JSON text.
        """
        data = self._normalize(value, frozenset(groups), version)
        return json.dumps(data)

    def deserialize(self, content: str | bytes, target: type[PayloadT]) -> PayloadT:
        """Decode JSON content into target.

        Raises:
            DeserializationException: If content is not valid JSON for target.
        """
        try:
            return target.model_validate_json(content)
        except ValidationError as e:
            raise DeserializationException(
                target.__name__, json.loads(e.json(include_url=False))
            ) from e

    def _normalize(self, value: Any, groups: frozenset[str], version: str | None) -> Any:
        if isinstance(value, BaseModel):
            return self._dump(value, groups, version)
        projection = self._projection_for(type(value))
        if projection is not None:
            return self._dump(projection.model_validate(value), groups, version)
        if isinstance(value, Mapping):
            return {str(k): self._normalize(v, groups, version) for k, v in value.items()}
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            return [self._normalize(v, groups, version) for v in value]
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        return value

    def _dump(self, model: BaseModel, groups: frozenset[str], version: str | None) -> Any:
        include = {
            name
            for name, info in type(model).model_fields.items()
            if is_exposed(info, groups, version)
        }
        return model.model_dump(mode="json", include=include)

    def _projection_for(self, entity_type: type) -> type[BaseModel] | None:
        for klass in entity_type.__mro__:
            projection = self._projections.get(klass)
            if projection is not None:
                return projection
        return None
