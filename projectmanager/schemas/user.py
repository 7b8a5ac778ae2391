"""Schemas for users"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password_hash: str = Field(..., min_length=1)


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    password_hash: str = Field(..., repr=False)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserOut):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class UserSummary(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True
