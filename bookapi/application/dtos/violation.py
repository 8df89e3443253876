"""DTO for validation results (no dependency on the validator backend)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Violation:
    """One failed constraint: the offending property and a human-readable message."""

    property_path: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"property_path": self.property_path, "message": self.message}
