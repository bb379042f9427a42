# backend/schemas/position_schema.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from schemas.common import ORMBase


class PositionSchemaBase(ORMBase):
    name: str = Field(..., min_length=1, max_length=255)
    # JSON-Schema document; stored as-is
    schema_: Dict[str, Any] = Field(default_factory=dict, alias="schema")


class PositionSchemaCreate(PositionSchemaBase):
    pass


class PositionSchemaUpdate(ORMBase):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    schema_: Optional[Dict[str, Any]] = Field(default=None, alias="schema")


class PositionSchemaSummary(ORMBase):
    id: int
    name: str


class PositionSchemaOut(PositionSchemaBase):
    id: int
    user_id: str
    created_at: datetime
    updated_at: datetime
