"""
Guest model
"""

import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, ForeignKey, Text
from sqlalchemy.orm import relationship

from wedding_planner.core.db import Base

class RSVPStatus(str, enum.Enum):
    PENDING = "PENDING"
    YES = "YES"
    NO = "NO"

class Guest(Base):
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=True, index=True)

    # Name
    title = Column(String(50), nullable=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    suffix = Column(String(50), nullable=True)

    # Contact
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)

    rsvp_status = Column(Enum(RSVPStatus), default=RSVPStatus.PENDING, nullable=False)
    table_number = Column(Integer, nullable=True, index=True)  # 1..TABLE_COUNT, None when unseated
    food_selection = Column(String(50), nullable=True)
    dietary_restrictions = Column(Text, nullable=True)
    is_child = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    group = relationship("Group", back_populates="guests")

    @property
    def full_name(self) -> str:
        parts = [self.title, self.first_name, self.last_name, self.suffix]
        return " ".join(p for p in parts if p)
