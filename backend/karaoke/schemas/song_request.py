"""Pydantic schemas for song requests and their status transitions."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from karaoke.models.song_request import RequestStatus

KEY_SHIFT_MIN = -3
KEY_SHIFT_MAX = 3


class SongRequestSubmit(BaseModel):
    nickname: str = Field(..., max_length=100)
    song_title: str = Field(..., max_length=255)
    key_shift: int = Field(0, ge=KEY_SHIFT_MIN, le=KEY_SHIFT_MAX)


class OperatorSongRequest(BaseModel):
    song_title: str = Field(..., max_length=255)
    nickname: Optional[str] = Field(None, max_length=100)
    key_shift: int = Field(0, ge=KEY_SHIFT_MIN, le=KEY_SHIFT_MAX)


class SongRequestOut(BaseModel):
    request_id: str
    event_id: str
    nickname: str
    song_title: str
    key_shift: int
    status: RequestStatus
    created_at: datetime
    created_by: Optional[str] = None

    model_config = {"from_attributes": True}


class StatusUpdate(BaseModel):
    status: RequestStatus


class StatusTransitionOut(BaseModel):
    request: SongRequestOut
    demoted_ids: list[str] = []


class BulkDelete(BaseModel):
    request_ids: list[str] = Field(..., min_length=1)


class BulkDeleteOut(BaseModel):
    deleted: int


class SubmissionReceipt(BaseModel):
    """Parameters the confirmation view is opened with."""
    event_code: str
    nickname: str
    song_title: str
    request_id: str
