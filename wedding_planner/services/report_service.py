"""
RSVP, meal and dietary reports for the caterer and the seating planner
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from wedding_planner.core.config import settings
from wedding_planner.models import Guest, RSVPStatus
from wedding_planner.services.guest_service import MEAL_CHOICES
from wedding_planner.services.repositories import GuestRepo

UNSELECTED = "Unselected"
UNASSIGNED = "Unassigned"

ALLERGY_KEYWORDS = (
    "allerg", "gluten", "dairy", "nut", "shellfish", "vegan", "vegetarian",
    "celiac", "lactose", "kosher", "halal", "intolerance", "avoid", "cannot",
)

@dataclass
class GuestFilter:
    """Criteria the admin guest list can be narrowed by; None means "any"."""
    rsvp_status: Optional[RSVPStatus] = None
    table_number: Optional[int] = None
    unassigned_only: bool = False
    has_dietary: Optional[bool] = None
    is_child: Optional[bool] = None
    group_id: Optional[int] = None
    query: Optional[str] = None

def has_dietary_restrictions(guest: Guest) -> bool:
    return bool((guest.dietary_restrictions or "").strip())

def filter_guests(guests: Iterable[Guest], criteria: GuestFilter) -> List[Guest]:
    """Pure filter over already loaded guests"""
    query = (criteria.query or "").strip().lower()

    def keep(guest: Guest) -> bool:
        if criteria.rsvp_status is not None and guest.rsvp_status != criteria.rsvp_status:
            return False
        if criteria.unassigned_only and guest.table_number is not None:
            return False
        if criteria.table_number is not None and guest.table_number != criteria.table_number:
            return False
        if criteria.has_dietary is not None and has_dietary_restrictions(guest) != criteria.has_dietary:
            return False
        if criteria.is_child is not None and bool(guest.is_child) != criteria.is_child:
            return False
        if criteria.group_id is not None and guest.group_id != criteria.group_id:
            return False
        if query and query not in f"{guest.first_name} {guest.last_name}".lower():
            return False
        return True

    return [g for g in guests if keep(g)]

def meal_key(guest: Guest) -> str:
    return guest.food_selection if guest.food_selection in MEAL_CHOICES else UNSELECTED

def count_meals(guests: Iterable[Guest]) -> Dict[str, int]:
    counts = {meal: 0 for meal in MEAL_CHOICES}
    counts[UNSELECTED] = 0
    for guest in guests:
        counts[meal_key(guest)] += 1
    return counts

def needs_allergy_attention(guest: Guest) -> bool:
    if has_dietary_restrictions(guest):
        return True
    text = f"{guest.dietary_restrictions or ''} {guest.food_selection or ''}".lower()
    return any(keyword in text for keyword in ALLERGY_KEYWORDS)

class ReportService:
    """Service for aggregate guest reports"""

    @staticmethod
    def confirmed_guests(db: Session) -> List[Guest]:
        return filter_guests(GuestRepo.list_all(db), GuestFilter(rsvp_status=RSVPStatus.YES))

    @staticmethod
    def rsvp_summary(db: Session) -> Dict:
        guests = GuestRepo.list_all(db)
        by_status = {status.value: 0 for status in RSVPStatus}
        for guest in guests:
            by_status[guest.rsvp_status.value] += 1
        confirmed = [g for g in guests if g.rsvp_status == RSVPStatus.YES]
        return {
            "total_guests": len(guests),
            "by_status": by_status,
            "confirmed_adults": sum(1 for g in confirmed if not g.is_child),
            "confirmed_children": sum(1 for g in confirmed if g.is_child),
            "confirmed_unseated": sum(1 for g in confirmed if g.table_number is None),
        }

    @staticmethod
    def meal_counts(db: Session) -> Dict[str, int]:
        return count_meals(ReportService.confirmed_guests(db))

    @staticmethod
    def table_meal_breakdown(db: Session) -> List[Dict]:
        """Meal counts of confirmed guests per table, with an Unassigned row last"""
        confirmed = ReportService.confirmed_guests(db)
        rows = []
        for number in range(1, settings.TABLE_COUNT + 1):
            seated = [g for g in confirmed if g.table_number == number]
            rows.append({
                "table": number,
                "meals": count_meals(seated),
                "has_dietary": any(has_dietary_restrictions(g) for g in seated),
            })

        unassigned = filter_guests(confirmed, GuestFilter(unassigned_only=True))
        if unassigned:
            rows.append({
                "table": UNASSIGNED,
                "meals": count_meals(unassigned),
                "has_dietary": any(has_dietary_restrictions(g) for g in unassigned),
            })
        return rows

    @staticmethod
    def allergy_report(db: Session) -> List[Dict]:
        return [
            {
                "id": g.id,
                "guest": g.full_name,
                "group": g.group.name if g.group and g.group.name else None,
                "email": g.email,
                "table_number": g.table_number,
                "food_selection": g.food_selection,
                "dietary_restrictions": g.dietary_restrictions,
                "is_child": g.is_child,
            }
            for g in ReportService.confirmed_guests(db)
            if needs_allergy_attention(g)
        ]
