"""
Table model

One row per table number, created at startup. Occupancy is always derived
from ``Guest.table_number``.
"""

from sqlalchemy import Column, Integer, String

from wedding_planner.core.db import Base

class SeatingTable(Base):
    __tablename__ = "tables"

    number = Column(Integer, primary_key=True, autoincrement=False)
    nickname = Column(String(100), nullable=True)
