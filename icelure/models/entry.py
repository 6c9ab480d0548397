"""Entry data model."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ResultLevel(str, Enum):
    """Outcome of a fishing trip, ordered low < medium < good."""

    LOW = "Low"
    MEDIUM = "Medium"
    GOOD = "Good"


class Entry(BaseModel):
    """Represents one logged fishing trip."""

    id: UUID = Field(default_factory=uuid4, description="Unique entry identifier")
    date: datetime = Field(default_factory=datetime.now, description="Trip timestamp")
    bait_type: str = Field(..., alias="baitType", description="Bait type (e.g., 'Jig')")
    bait_color: str = Field(..., alias="baitColor", description="Bait color (e.g., 'Red')")
    target_fish: str = Field(default="", alias="targetFish", description="Target fish")
    depth: float = Field(..., ge=0, description="Fishing depth in meters")
    result: ResultLevel = Field(..., description="Result level")
    notes: str = Field(default="", description="User notes")

    model_config = {"frozen": True, "populate_by_name": True}
