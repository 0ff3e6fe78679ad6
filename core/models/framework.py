# =============================================================================
# core/models/framework.py - MAS Framework Schema
# =============================================================================
# The MAS framework tags an artist with three ordered lists:
# values, goals and brand. Stored as jsonb arrays in `mas_frameworks`.
# One framework per artist, enforced by convention only.
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, Field

FRAMEWORK_FIELDS = ("values", "goals", "brand")


class MASFramework(BaseModel):
    """
    Schema for a `mas_frameworks` row.

    Example:
        {
            "id": "660e8400-e29b-41d4-a716-446655440001",
            "artist_id": "550e8400-e29b-41d4-a716-446655440000",
            "values": ["honesty", "craft"],
            "goals": ["release EP", "tour"],
            "brand": ["coastal", "warm"]
        }
    """

    # None for a framework that hasn't been stored yet
    id: UUID | None = Field(
        default=None,
        description="Unique framework identifier"
    )

    artist_id: UUID = Field(
        ...,
        description="Artist this framework belongs to"
    )

    values: list[str] = Field(
        default_factory=list,
        description="Core values"
    )

    goals: list[str] = Field(
        default_factory=list,
        description="Goals"
    )

    brand: list[str] = Field(
        default_factory=list,
        description="Brand attributes"
    )
