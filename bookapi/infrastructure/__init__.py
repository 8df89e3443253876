"""Infrastructure: cache, persistence, serialization, security and versioning adapters."""
