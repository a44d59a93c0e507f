"""Pydantic schemas for Events."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    song_minutes_avg: Optional[float] = Field(None, gt=0, allow_inf_nan=False)


class EventOut(BaseModel):
    event_id: str
    name: str
    join_code: str
    is_active: bool
    accepting_requests: bool = Field(validation_alias="is_accepting")
    song_minutes_avg: Optional[float] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class EventDeleted(BaseModel):
    event_id: str
    requests_deleted: int
