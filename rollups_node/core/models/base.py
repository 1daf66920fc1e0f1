"""
Base Pydantic models for the rollups node.

Provides common configuration and base classes for all node models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class NodeBaseModel(BaseModel):
    """Base model for all node Pydantic models.

    Configuration:
        - strict: Strict type coercion (no implicit conversions)
        - validate_assignment: Validate on attribute assignment
        - extra: Reject unknown fields
        - use_enum_values: Serialize enums as values
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        use_enum_values=True,
        revalidate_instances="never",
    )


class ImmutableModel(NodeBaseModel):
    """Immutable base model for values that should not change after creation."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        use_enum_values=False,
        arbitrary_types_allowed=True,
        revalidate_instances="never",
    )
