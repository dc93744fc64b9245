from typing import Optional, List
from pydantic import BaseModel, Field

from court_calendar.extraction.schemas import ExtractedSession


class ExtractRequest(BaseModel):
    filePath: Optional[str] = Field(default=None, max_length=1024)
    enrich: Optional[bool] = None
    building: Optional[str] = Field(default=None, max_length=20)


class EnrichRequest(BaseModel):
    sessions: List[ExtractedSession] = Field(max_length=500)
    building: Optional[str] = Field(default=None, max_length=20)


class DecomposeRequest(BaseModel):
    text: str = Field(min_length=1, max_length=2000)


class RegistryReloadRequest(BaseModel):
    building: Optional[str] = Field(default=None, max_length=20)
