"""Book API: authors and users REST service with a tag-invalidated list cache."""
