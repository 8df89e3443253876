"""Domain layer: error taxonomy shared by every other layer."""
