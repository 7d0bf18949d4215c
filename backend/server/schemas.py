from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class CoordinateModel(BaseModel):
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class MoveRequest(BaseModel):
    start: CoordinateModel
    destination: CoordinateModel


class ResetRequest(BaseModel):
    difficulty: Optional[int] = Field(default=None, ge=1, le=5)


class ConfigRequest(BaseModel):
    difficulty: Optional[int] = Field(default=None, ge=1, le=5)
    thinkingDelay: Optional[float] = Field(default=None, ge=0.0, le=10.0)
