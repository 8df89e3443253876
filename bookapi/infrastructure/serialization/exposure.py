"""Field exposure metadata: serialization groups and version ranges.

Projection schemas declare each field with exposed(); the serializer keeps a
field when it belongs to one of the requested groups and the requested API
version falls inside its [since, until] range.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic.fields import FieldInfo

GROUPS_KEY = "groups"
SINCE_KEY = "since"
UNTIL_KEY = "until"


def exposed(*groups: str, since: str | None = None, until: str | None = None) -> Any:
    """Declare a projection field visible in groups, optionally for a version range."""
    return Field(
        json_schema_extra={
            GROUPS_KEY: list(groups),
            SINCE_KEY: since,
            UNTIL_KEY: until,
        }
    )


def version_tuple(version: str) -> tuple[int, ...]:
    """Parse a dotted numeric version ('2.0' -> (2, 0)); trailing zeros are ignored."""
    parts = [int(p) for p in version.split(".")]
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def is_exposed(info: FieldInfo, groups: frozenset[str], version: str | None) -> bool:
    """Return True if the field is part of groups and of version.

    Fields without exposure metadata are always included. When version is
    None, since/until are not applied.
    """
    extra = info.json_schema_extra
    if not isinstance(extra, dict) or GROUPS_KEY not in extra:
        return True
    field_groups = extra.get(GROUPS_KEY) or []
    if not groups.intersection(field_groups):
        return False
    if version is None:
        return True
    requested = version_tuple(version)
    since = extra.get(SINCE_KEY)
    until = extra.get(UNTIL_KEY)
    if isinstance(since, str) and requested < version_tuple(since):
        return False
    if isinstance(until, str) and requested > version_tuple(until):
        return False
    return True
