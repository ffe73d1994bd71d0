"""
Guest-related Pydantic schemas
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field

from wedding_planner.models.guest import RSVPStatus

class GuestCreate(BaseModel):
    """Schema for creating a guest"""
    group_id: Optional[int] = None
    title: Optional[str] = None
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    suffix: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    is_child: bool = False
    table_number: Optional[Any] = None

class GuestUpdate(BaseModel):
    """Schema for updating a guest from the admin pages"""
    title: Optional[str] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    suffix: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    rsvp_status: Optional[RSVPStatus] = None
    food_selection: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    is_child: Optional[bool] = None
    # Any so the seating engine can report InvalidTable itself
    table_number: Optional[Any] = None

class RSVPReply(BaseModel):
    """A guest's own RSVP answer"""
    rsvp_status: RSVPStatus
    food_selection: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    email: Optional[EmailStr] = None

class GuestResponse(BaseModel):
    """Guest response schema"""
    id: int
    group_id: Optional[int] = None
    title: Optional[str] = None
    first_name: str
    last_name: str
    suffix: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    rsvp_status: RSVPStatus
    table_number: Optional[int] = None
    food_selection: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    is_child: bool
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class SearchGuest(BaseModel):
    """Guest as shown in RSVP search results"""
    id: int
    title: Optional[str] = None
    first_name: str
    last_name: str
    rsvp_status: RSVPStatus
    food_selection: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    is_child: bool
    table_number: Optional[int] = None

    class Config:
        from_attributes = True
