"""
Pydantic models for saved projects.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    owner_id: str = Field(..., min_length=1)
    design: dict[str, Any] = Field(
        default_factory=dict,
        description="Calculator inputs/results the user chose to keep",
    )


class Project(BaseModel):
    id: str
    name: str
    owner_id: str
    design: dict[str, Any]
    created_at: datetime
