"""Cache key builders. Single place for list key format (DRY).

Keys are "list_name-page-limit" or "list_name-page-limit-version". Text
components (list_name, version) must not contain CACHE_KEY_SEP, otherwise
two different tuples could produce the same key.
"""

from bookapi.core.constants import CACHE_KEY_SEP


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def _validate_positive(value: int, name: str) -> None:
    # bool is an int subclass; True would silently become page 1
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Cache key component {name!r} must be a positive integer")


def build_list_key(
    list_name: str,
    page: int,
    limit: int,
    version: str | None = None,
) -> str:
    """Cache key for one page of a resource list.

    page and limit must already be resolved (defaults applied upstream).

    Args:
        list_name: Resource list name (e.g. 'authors').
        page: 1-based page number.
        limit: Page size.
        version: Optional API version the payload was serialized for.

    Returns:
        Deterministic key, distinct for every distinct argument tuple.

    Raises:
        ValueError: If a component is invalid.
    """
    _validate_key_component(list_name, "list_name")
    _validate_positive(page, "page")
    _validate_positive(limit, "limit")
    parts = [list_name, str(page), str(limit)]
    if version is not None:
        _validate_key_component(version, "version")
        parts.append(version)
    return CACHE_KEY_SEP.join(parts)
