from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class ScanRequest(BaseModel):
    """DTO for a face scan submitted by a gate terminal"""
    descriptor: List[float]
    terminal_id: str = Field(..., min_length=1)


class IdentitySummary(BaseModel):
    """DTO for the recognised person (descriptor omitted)"""
    id: str
    name: str
    department: str
    role: str
    mode: str


class AttendanceRecordResponse(BaseModel):
    """DTO for today's attendance record after a granted scan"""
    person_id: str
    role: str
    date: str
    in_timestamp: Optional[datetime] = None
    out_timestamp: Optional[datetime] = None
    status: Optional[str] = None
    cycle: int


class ScanResponse(BaseModel):
    """DTO for the gate decision"""
    status: str
    reason: str
    message: str
    direction: Optional[str] = None
    distance: Optional[float] = None
    remaining_seconds: Optional[int] = None
    identity: Optional[IdentitySummary] = None
    record: Optional[AttendanceRecordResponse] = None
    log_entry_id: Optional[str] = None
    pass_request_id: Optional[str] = None
    terminal_id: str
    scanned_at: datetime


class DirectoryRefreshResponse(BaseModel):
    """DTO for a forced directory reload"""
    identities: int
    loaded_at: Optional[datetime] = None
