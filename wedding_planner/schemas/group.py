"""
Group-related Pydantic schemas
"""

import re
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from .guest import GuestResponse, SearchGuest

PHONE_PATTERN = re.compile(r"^\+?[0-9 ().-]{7,20}$")
POSTAL_CODE_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 -]{1,9}$")

class MemberCreate(BaseModel):
    """A guest created together with its group"""
    title: Optional[str] = None
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    suffix: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    is_child: bool = False
    table_number: Optional[int] = None

class GroupFields(BaseModel):
    """Editable group fields shared by create and update"""
    name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        if value is not None and value.strip() and not PHONE_PATTERN.match(value.strip()):
            raise ValueError("phone must contain 7-20 digits or separators")
        return value

    @field_validator("postal_code")
    @classmethod
    def check_postal_code(cls, value):
        if value is not None and value.strip() and not POSTAL_CODE_PATTERN.match(value.strip()):
            raise ValueError("postal_code is not a valid postal code")
        return value

class GroupCreate(GroupFields):
    """Schema for creating a group with its members"""
    members: List[MemberCreate] = Field(min_length=1)

class GroupUpdate(GroupFields):
    """Schema for updating a group; only fields that are sent are changed"""

class GroupResponse(BaseModel):
    """Group with its members"""
    id: int
    name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    guests: List[GuestResponse] = []

    class Config:
        from_attributes = True

class SearchGroup(BaseModel):
    """One RSVP search hit: a real group or a pseudo-group for a single guest"""
    id: str
    name: Optional[str] = None
    guests: List[SearchGuest]
