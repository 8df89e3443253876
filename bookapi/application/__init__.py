"""Application layer: use cases, services and the ports they depend on."""
