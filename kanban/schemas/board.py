"""Schemas for boards"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from kanban.schemas.column import ColumnResponse


class BoardCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class BoardUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class BoardResponse(BaseModel):
    id: int
    name: str
    owner_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BoardWithColumnsResponse(BoardResponse):
    columns: List[ColumnResponse] = Field(default_factory=list)
