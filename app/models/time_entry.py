"""Time entry model definitions."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TimeEntryBase(BaseModel):
    """Base time entry fields."""

    channel_id: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=0)
    is_active: bool
    title: Optional[str] = None
    project_id: Optional[str] = None


class TimeEntry(TimeEntryBase):
    """Full time entry model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str

    model_config = {"populate_by_name": True}
