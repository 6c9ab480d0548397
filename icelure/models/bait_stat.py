"""BaitStat data model."""

from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class BaitStat(BaseModel):
    """Aggregated usage and outcome for one bait type/color combination.

    The id is regenerated on every recompute and carries no identity
    across recomputations.
    """

    id: UUID = Field(default_factory=uuid4, description="Per-recompute identifier")
    bait_name: str = Field(..., alias="baitName", description="Bait type and color")
    usage_count: int = Field(..., ge=1, alias="usageCount", description="Number of entries")
    average_result: float = Field(
        ..., ge=1.0, le=3.0, alias="averageResult", description="Mean result value (1.0-3.0)"
    )

    model_config = {"frozen": True, "populate_by_name": True}
