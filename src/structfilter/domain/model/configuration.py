"""Filter configuration.

User-provided settings for how records are read and generated.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Configuration DTO for StructFilter.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        tag_key: Dataclass field metadata key holding the field tag.
            Read from original fields, written to generated fields.
        hidden_prefix: Fields whose name starts with this prefix are hidden:
            never passed to rules, always dropped.
        copy_dataclass_params: Generated records copy eq, order, frozen and
            unsafe_hash of the original record. Off = plain dataclasses.
    """

    tag_key: str = "tag"
    hidden_prefix: str = "_"
    copy_dataclass_params: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.tag_key:
            raise ValueError("tag_key must not be empty")
        if not self.hidden_prefix:
            raise ValueError("hidden_prefix must not be empty")

    def is_hidden(self, name: str) -> bool:
        """Check if a field name is hidden from rules."""
        return name.startswith(self.hidden_prefix)
