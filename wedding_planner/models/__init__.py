"""
Database models package
"""

from .group import Group
from .guest import Guest, RSVPStatus
from .table import SeatingTable

__all__ = ["Group", "Guest", "RSVPStatus", "SeatingTable"]
