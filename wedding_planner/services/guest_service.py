"""
Guest management and RSVP replies
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from wedding_planner.core.exceptions import GroupNotFoundError, GuestsNotFoundError, ValidationError
from wedding_planner.models import Guest, RSVPStatus
from wedding_planner.schemas.guest import GuestCreate, GuestUpdate, RSVPReply
from wedding_planner.services.repositories import GroupRepo, GuestRepo
from wedding_planner.services.seating_service import SeatingService

logger = logging.getLogger(__name__)

MEAL_CHOICES = ("Chicken", "Beef", "Fish", "Vegetarian", "Kids Meal")

def _clean(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value

class GuestService:
    """Service for guest operations"""

    @staticmethod
    def get_guest(guest_id: int, db: Session) -> Guest:
        guest = GuestRepo.get(db, guest_id)
        if not guest:
            raise GuestsNotFoundError([guest_id])
        return guest

    @staticmethod
    def list_guests(db: Session) -> List[Guest]:
        return GuestRepo.list_all(db)

    @staticmethod
    def create_guest(data: GuestCreate, db: Session) -> Guest:
        fields = {k: _clean(v) for k, v in data.model_dump().items()}
        fields["table_number"] = SeatingService.normalize_table_number(fields.get("table_number"))

        if fields.get("group_id") is not None and not GroupRepo.get(db, fields["group_id"], with_members=False):
            raise GroupNotFoundError(fields["group_id"])

        try:
            SeatingService.reserve_new_seats([fields["table_number"]], db)
            guest = GuestRepo.create(db, **fields)
        except Exception:
            db.rollback()
            raise

        logger.info(f"Created guest {guest.id}")
        return guest

    @staticmethod
    def update_guest(guest_id: int, data: GuestUpdate, db: Session) -> Guest:
        """Apply an admin edit. A table change goes through the seating engine first."""
        guest = GuestService.get_guest(guest_id, db)
        patch = data.model_dump(exclude_unset=True)
        table_change = "table_number" in patch
        table_number = patch.pop("table_number", None)

        for key in ("first_name", "last_name"):
            if key in patch and not _clean(patch[key]):
                raise ValidationError(f"{key} cannot be empty", [key])
        for key in ("rsvp_status", "is_child"):
            if key in patch and patch[key] is None:
                patch.pop(key)
        patch = {k: _clean(v) for k, v in patch.items()}
        GuestService.validate_meal(patch.get("food_selection"))

        if table_change:
            SeatingService.assign(table_number, [guest_id], db)
            guest = GuestService.get_guest(guest_id, db)

        if not patch:
            return guest
        return GuestRepo.update(db, guest, patch)

    @staticmethod
    def submit_rsvp(guest_id: int, reply: RSVPReply, db: Session) -> Guest:
        """Record a guest's own answer. Declining clears the meal choice."""
        guest = GuestService.get_guest(guest_id, db)

        food = _clean(reply.food_selection)
        GuestService.validate_meal(food)
        patch: Dict[str, Any] = {
            "rsvp_status": reply.rsvp_status,
            "food_selection": food if reply.rsvp_status == RSVPStatus.YES else None,
            "dietary_restrictions": _clean(reply.dietary_restrictions),
        }
        if reply.email:
            patch["email"] = reply.email

        guest = GuestRepo.update(db, guest, patch)
        logger.info(f"RSVP {guest.rsvp_status.value} recorded for guest {guest.id}")
        return guest

    @staticmethod
    def delete_guest(guest_id: int, db: Session) -> None:
        guest = GuestService.get_guest(guest_id, db)
        GuestRepo.delete(db, guest)
        logger.info(f"Deleted guest {guest_id}")

    @staticmethod
    def validate_meal(food_selection: Optional[str]) -> None:
        if food_selection is not None and food_selection not in MEAL_CHOICES:
            raise ValidationError(
                f"Unknown meal selection '{food_selection}'",
                [f"food_selection must be one of: {', '.join(MEAL_CHOICES)}"],
            )
