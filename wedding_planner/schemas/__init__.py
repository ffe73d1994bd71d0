"""
Pydantic schemas package
"""

from .common import *
from .guest import *
from .group import *
from .seating import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "GuestCreate",
    "GuestUpdate",
    "GuestResponse",
    "RSVPReply",
    "SearchGuest",
    "MemberCreate",
    "GroupCreate",
    "GroupUpdate",
    "GroupResponse",
    "SearchGroup",
    "SeatingRequest",
    "TableNicknameUpdate",
    "Position",
    "FloorLayoutUpdate",
]
