"""Pydantic schemas for board posts.

Learn: Separate "Create" schemas (input) from "Read" schemas (output).
BoardRead carries owner_id only — the owning User is never embedded.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from boardkeep.db.models import BoardStatus


class BoardCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)

    model_config = {"str_strip_whitespace": True}


class BoardStatusUpdate(BaseModel):
    status: BoardStatus


class BoardRead(BaseModel):
    id: int
    title: str
    description: str
    status: BoardStatus
    owner_id: uuid.UUID
    created_at: datetime

    model_config = {"from_attributes": True}
