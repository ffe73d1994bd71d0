"""
Seating, table and floor layout schemas
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, model_validator

class SeatingRequest(BaseModel):
    """Assign or clear a table for a whole group, a list of guests, or a subset of a group.

    ``table_number`` is left untyped so that the seating engine, not the
    request parser, decides what counts as a valid table.
    """
    group_id: Optional[int] = None
    guest_ids: Optional[List[int]] = None
    table_number: Optional[Any] = None

    @model_validator(mode="after")
    def check_target(self):
        if self.group_id is None and self.guest_ids is None:
            raise ValueError("Provide group_id or a non-empty guest_ids array")
        if self.guest_ids is not None and len(self.guest_ids) == 0:
            raise ValueError("Provide group_id or a non-empty guest_ids array")
        return self

class TableNicknameUpdate(BaseModel):
    """Set or clear the nickname of a table"""
    number: Any
    nickname: Optional[str] = None

class Position(BaseModel):
    """Normalized position of a table on the floor plan"""
    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)

class FloorLayoutUpdate(BaseModel):
    """Full replacement of the saved floor layout"""
    layout: Dict[int, Position]
