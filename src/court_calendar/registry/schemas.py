"""Registry records consumed (read-only) for enrichment.

Rows arrive straight from the registry queries, so nullable columns are
coerced here: missing strings become "" and a missing clerk list becomes [].
"""
from __future__ import annotations
from typing import Any, List
from pydantic import BaseModel, ConfigDict, field_validator


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class Room(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str = ""
    room_id: str = ""
    room_number: str = ""
    courtroom_number: str = ""
    is_active: bool = True

    @field_validator('id', 'room_id', 'room_number', 'courtroom_number', mode='before')
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator('is_active', mode='before')
    @classmethod
    def _active(cls, v: Any) -> bool:
        return True if v is None else bool(v)


class PersonnelProfile(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str = ""
    display_name: str = ""
    full_name: str = ""
    primary_role: str = ""
    title: str = ""
    department: str = ""

    @field_validator('id', 'display_name', 'full_name', 'primary_role', 'title', 'department', mode='before')
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_text(v)

    @property
    def role(self) -> str:
        return (self.primary_role or self.title).lower()

    @property
    def preferred_name(self) -> str:
        return self.display_name or self.full_name

    def has_role(self, *keywords: str) -> bool:
        role = self.role
        return any(k in role for k in keywords)


class Assignment(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str = ""
    room_id: str = ""
    justice: str = ""
    clerks: List[str] = []
    sergeant: str = ""

    @field_validator('id', 'room_id', 'justice', 'sergeant', mode='before')
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator('clerks', mode='before')
    @classmethod
    def _clerks(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return []
        return [_as_text(c) for c in v if _as_text(c)]


__all__ = ['Room', 'PersonnelProfile', 'Assignment']
