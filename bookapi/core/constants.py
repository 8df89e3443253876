"""Core constants: cache tags, list names, roles and serialization groups.

Single source of truth for cache key structure and the per-resource
caching shape shared by list endpoints and mutation endpoints.
"""

# Delimiter for list cache keys (list_name-page-limit[-version])
CACHE_KEY_SEP = "-"

# List names used as the first component of list cache keys
AUTHORS_LIST_NAME = "authors"
USERS_LIST_NAME = "users"

# Invalidation tags; every mutation of a resource invalidates its tag
AUTHORS_CACHE_TAG = "authorsCache"
USERS_CACHE_TAG = "usersCache"

# Pagination defaults
DEFAULT_PAGE = 1
AUTHORS_DEFAULT_LIMIT = 3
USERS_DEFAULT_LIMIT = 100
MAX_PAGE = 100_000
MAX_LIMIT = 1000

# Serialization groups
AUTHORS_GROUP = "getAuthors"
USERS_GROUP = "getUsers"

# Roles (ROLE_ADMIN implies ROLE_USER)
ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"
ROLE_HIERARCHY: dict[str, frozenset[str]] = {
    ROLE_ADMIN: frozenset({ROLE_USER}),
}
