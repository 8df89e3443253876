"""API version resolution from the Accept header.

Clients select a serialization version with a media type parameter, e.g.
``Accept: application/json; version=2.0``. Anything that is not a dotted
numeric version falls back to the configured default, so versions are safe
to embed in cache keys.
"""

import logging
import re

logger = logging.getLogger(__name__)

VERSION_PARAM = "version"
VERSION_PATTERN = re.compile(r"^\d+(\.\d+){0,3}$")


class VersionResolver:
    """Resolve the serialization version requested by the client."""

    def __init__(self, default_version: str) -> None:
        if not VERSION_PATTERN.match(default_version):
            raise ValueError(f"Invalid default API version: {default_version!r}")
        self.default_version = default_version

    def resolve(self, accept_header: str | None) -> str:
        """Return the first valid version= parameter of the Accept header, else the default."""
        if not accept_header:
            return self.default_version
        for media_range in accept_header.split(","):
            for param in media_range.split(";")[1:]:
                name, _, value = param.partition("=")
                if name.strip().lower() != VERSION_PARAM:
                    continue
                value = value.strip().strip('"')
                if VERSION_PATTERN.match(value):
                    return value
                logger.debug("Ignoring invalid API version %r in Accept header", value)
        return self.default_version
