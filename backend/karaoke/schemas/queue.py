"""Pydantic schemas for projected queue views."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class QueueRow(BaseModel):
    position: int
    request_id: str
    nickname: str
    song_title: str
    key_shift: int
    status: str
    status_label: str
    wait_minutes: int


class OperatorQueueRow(QueueRow):
    created_by: Optional[str] = None
    created_at: datetime


class QueueView(BaseModel):
    event_id: str
    event_name: str
    join_code: str
    accepting_requests: bool
    song_minutes_avg: float
    rows: list[QueueRow]


class OperatorQueueView(QueueView):
    rows: list[OperatorQueueRow]


class ReceiptView(BaseModel):
    event_name: str
    join_code: str
    found: bool
    request_id: Optional[str] = None
    nickname: Optional[str] = None
    song_title: Optional[str] = None
    position: Optional[int] = None
    status: Optional[str] = None
    wait_minutes: Optional[int] = None
    matched_by: Optional[str] = None
