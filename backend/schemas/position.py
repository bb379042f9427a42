# backend/schemas/position.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from schemas.common import ORMBase
from schemas.position_schema import PositionSchemaSummary


# Position as it appears inside an item payload
class PositionInput(ORMBase):
    position_schema_id: int
    data: Dict[str, Any] = Field(default_factory=dict)


class PositionCreate(PositionInput):
    pass


class PositionUpdate(ORMBase):
    position_schema_id: Optional[int] = None
    data: Optional[Dict[str, Any]] = None


class PositionOut(ORMBase):
    id: int
    user_id: str
    item_id: int
    position_schema_id: int
    data: Dict[str, Any]
    position_schema: Optional[PositionSchemaSummary] = None
    created_at: datetime
    updated_at: datetime
