"""Project model definitions."""
from pydantic import BaseModel, Field


class Project(BaseModel):
    """Project a time entry can be assigned to."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    name: str

    model_config = {"populate_by_name": True}
