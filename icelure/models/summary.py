"""ResultsSummary data model."""

from typing import Optional

from pydantic import BaseModel, Field

from icelure.models.bait_stat import BaitStat


class ResultsSummary(BaseModel):
    """Headline figures derived from the journal."""

    best_bait: Optional[BaitStat] = Field(default=None, description="Top ranked bait")
    best_depth: float = Field(..., ge=0, description="Mean depth of good catches")
    good_catches: int = Field(..., ge=0, description="Number of good results")
    top_fish: str = Field(..., description="Most frequently targeted fish")
    top_fish_count: int = Field(..., ge=0, description="Entries targeting the top fish")
    average_result: float = Field(..., ge=0, le=3.0, description="Mean result over all trips")
    total_trips: int = Field(..., ge=0, description="Number of entries")

    model_config = {"frozen": True}
