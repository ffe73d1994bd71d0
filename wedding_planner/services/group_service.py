"""
Group management: creating households with their members, editing and removal
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from wedding_planner.core.exceptions import GroupNotFoundError, ValidationError
from wedding_planner.models import Group
from wedding_planner.schemas.group import GroupCreate, GroupUpdate
from wedding_planner.services.repositories import GroupRepo
from wedding_planner.services.seating_service import SeatingService

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = ("street", "city", "state", "postal_code", "country")

def _clean(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value

class GroupService:
    """Service for group operations"""

    @staticmethod
    def list_groups(db: Session) -> List[Group]:
        return GroupRepo.list(db)

    @staticmethod
    def get_group(group_id: int, db: Session) -> Group:
        group = GroupRepo.get(db, group_id)
        if not group:
            raise GroupNotFoundError(group_id)
        return group

    @staticmethod
    def create_group(data: GroupCreate, db: Session) -> Group:
        """Create a group and its members in one transaction.

        Members given a table number are counted against that table's
        capacity before anything is written.
        """
        fields = {k: _clean(v) for k, v in data.model_dump(exclude={"members"}).items()}
        GroupService.validate_address(fields)

        members: List[Dict[str, Any]] = []
        for member in data.members:
            values = {k: _clean(v) for k, v in member.model_dump().items()}
            values["table_number"] = SeatingService.normalize_table_number(values.get("table_number"))
            members.append(values)

        try:
            SeatingService.reserve_new_seats((m["table_number"] for m in members), db)
            group = GroupRepo.create(db, fields, members)
        except Exception:
            db.rollback()
            raise

        logger.info(f"Created group {group.id} with {len(members)} guests")
        return group

    @staticmethod
    def update_group(group_id: int, data: GroupUpdate, db: Session) -> Group:
        group = GroupService.get_group(group_id, db)
        patch = {k: _clean(v) for k, v in data.model_dump(exclude_unset=True).items()}

        merged = {field: patch.get(field, getattr(group, field)) for field in ADDRESS_FIELDS}
        GroupService.validate_address(merged)

        return GroupRepo.update(db, group, patch)

    @staticmethod
    def delete_group(group_id: int, db: Session) -> None:
        group = GroupService.get_group(group_id, db)
        GroupRepo.delete(db, group)
        logger.info(f"Deleted group {group_id} and its guests")

    @staticmethod
    def validate_address(fields: Dict[str, Optional[str]]) -> None:
        """A postal address, once started, needs at least a street and a city"""
        if not any(fields.get(f) for f in ADDRESS_FIELDS):
            return
        errors = [f"{f} is required when an address is given" for f in ("street", "city") if not fields.get(f)]
        if errors:
            raise ValidationError("Incomplete postal address", errors)
