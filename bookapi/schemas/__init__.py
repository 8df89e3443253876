"""API schemas: request payloads, validation constraints and projections."""
