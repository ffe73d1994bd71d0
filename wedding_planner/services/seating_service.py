"""
Seating assignment and table capacity enforcement
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from wedding_planner.core.config import settings
from wedding_planner.core.exceptions import (
    CapacityExceededError,
    GroupNotFoundError,
    GuestsNotFoundError,
    InvalidTableError,
)
from wedding_planner.models import Group, Guest, SeatingTable
from wedding_planner.services.repositories import GroupRepo, GuestRepo, TableRepo

logger = logging.getLogger(__name__)

@dataclass
class AssignmentResult:
    """Outcome of a seating change, for the caller to refresh its view"""
    table_number: Optional[int]
    guest_ids: List[int]
    groups: List[Group] = field(default_factory=list)
    ungrouped_guests: List[Guest] = field(default_factory=list)

class SeatingService:
    """Service for seating arrangement operations"""

    @staticmethod
    def normalize_table_number(value: Any) -> Optional[int]:
        """Return the table number as an int, or None to clear.

        Integral floats and numeric strings are accepted; anything else
        outside 1..TABLE_COUNT raises InvalidTableError.
        """
        if value is None:
            return None

        table_count = settings.TABLE_COUNT
        if isinstance(value, bool):
            raise InvalidTableError(value, table_count)

        number: Optional[int] = None
        if isinstance(value, int):
            number = value
        elif isinstance(value, float):
            if value.is_integer():
                number = int(value)
        elif isinstance(value, str):
            text = value.strip()
            try:
                parsed = float(text)
            except ValueError:
                parsed = None
            if parsed is not None and parsed.is_integer():
                number = int(parsed)

        if number is None or number < 1 or number > table_count:
            raise InvalidTableError(value, table_count)
        return number

    @staticmethod
    def assign(
        table_number: Any,
        guest_ids: Iterable[int],
        db: Session
    ) -> AssignmentResult:
        """Seat the given guests at a table, or clear their table when it is None"""
        target = SeatingService.normalize_table_number(table_number)
        ids = set(guest_ids)
        if not ids:
            raise GuestsNotFoundError([])

        guests = GuestRepo.find_by_ids(db, ids)
        missing = ids - {g.id for g in guests}
        if missing:
            raise GuestsNotFoundError(missing)

        SeatingService._apply(target, guests, db)
        return SeatingService._result(target, ids, db)

    @staticmethod
    def assign_whole_group(
        group_id: int,
        table_number: Any,
        db: Session
    ) -> AssignmentResult:
        """Seat every member of a group at a table, or clear all of them"""
        target = SeatingService.normalize_table_number(table_number)
        group = GroupRepo.get(db, group_id, with_members=False)
        if not group:
            raise GroupNotFoundError(group_id)

        members = GuestRepo.list_by_group(db, group_id)
        SeatingService._apply(target, members, db)

        db.expire_all()
        group = GroupRepo.get(db, group_id)
        return AssignmentResult(
            table_number=target,
            guest_ids=sorted(m.id for m in members),
            groups=[group],
        )

    @staticmethod
    def assign_subset_of_group(
        group_id: int,
        member_ids: Iterable[int],
        table_number: Any,
        db: Session
    ) -> AssignmentResult:
        """Seat only some members of a group; the rest keep their tables"""
        target = SeatingService.normalize_table_number(table_number)
        group = GroupRepo.get(db, group_id, with_members=False)
        if not group:
            raise GroupNotFoundError(group_id)

        ids = set(member_ids)
        if not ids:
            raise GuestsNotFoundError([])
        members = [g for g in GuestRepo.list_by_group(db, group_id) if g.id in ids]
        missing = ids - {m.id for m in members}
        if missing:
            raise GuestsNotFoundError(missing)

        SeatingService._apply(target, members, db)
        return SeatingService._result(target, ids, db)

    @staticmethod
    def _apply(target: Optional[int], guests: List[Guest], db: Session) -> None:
        """Check capacity and move guests in one transaction"""
        ids = [g.id for g in guests]
        if not ids:
            return

        try:
            if target is None:
                GuestRepo.update_many(db, ids, {"table_number": None})
                db.commit()
                logger.info(f"Cleared table for guests {sorted(ids)}")
                return

            TableRepo.lock(db, target)
            # Read current tables inside the lock, not from the caller's snapshot
            current_tables = dict(
                db.query(Guest.id, Guest.table_number).filter(Guest.id.in_(ids)).all()
            )
            capacity = settings.TABLE_CAPACITY
            current_seats = GuestRepo.count_at_table(db, target)
            to_add = sum(1 for guest_id in ids if current_tables.get(guest_id) != target)

            if current_seats + to_add > capacity:
                logger.warning(
                    f"Rejected seating {len(ids)} guests at table {target}: "
                    f"{current_seats}/{capacity} filled, {to_add} to add"
                )
                raise CapacityExceededError(target, current_seats, to_add, capacity)

            if to_add:
                GuestRepo.update_many(db, ids, {"table_number": target})
            db.commit()
            logger.info(f"Seated guests {sorted(ids)} at table {target} ({current_seats + to_add}/{capacity})")
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def reserve_new_seats(table_numbers: Iterable[Optional[int]], db: Session) -> None:
        """Lock and check tables for guests about to be created.

        Leaves the transaction open; the caller adds the guests and commits,
        or rolls back when this raises.
        """
        requested: Dict[int, int] = {}
        for number in table_numbers:
            if number is not None:
                requested[number] = requested.get(number, 0) + 1

        capacity = settings.TABLE_CAPACITY
        for number in sorted(requested):
            TableRepo.lock(db, number)
            current_seats = GuestRepo.count_at_table(db, number)
            if current_seats + requested[number] > capacity:
                logger.warning(f"Rejected {requested[number]} new guests at table {number}: {current_seats}/{capacity} filled")
                raise CapacityExceededError(number, current_seats, requested[number], capacity)

    @staticmethod
    def _result(target: Optional[int], ids: Set[int], db: Session) -> AssignmentResult:
        db.expire_all()
        guests = GuestRepo.find_by_ids(db, ids)
        group_ids = {g.group_id for g in guests if g.group_id is not None}
        return AssignmentResult(
            table_number=target,
            guest_ids=sorted(ids),
            groups=GroupRepo.find_by_ids(db, group_ids),
            ungrouped_guests=sorted(
                (g for g in guests if g.group_id is None),
                key=lambda g: (g.last_name, g.first_name),
            ),
        )

    @staticmethod
    def set_table_nickname(number: Any, nickname: Optional[str], db: Session) -> SeatingTable:
        """Set a table's nickname; blank clears it"""
        table_number = SeatingService.normalize_table_number(number)
        if table_number is None:
            raise InvalidTableError(number, settings.TABLE_COUNT)
        nickname = nickname.strip() if nickname else None
        return TableRepo.upsert_nickname(db, table_number, nickname or None)

    @staticmethod
    def get_table_occupancy(db: Session) -> Dict[int, int]:
        """Seated guest count for every table number"""
        counts = GuestRepo.count_by_table(db)
        return {n: counts.get(n, 0) for n in range(1, settings.TABLE_COUNT + 1)}

    @staticmethod
    def get_table_guests(table_number: int, db: Session) -> List[Dict]:
        """Get all guests for a specific table"""
        guests = GuestRepo.list_at_table(db, table_number)
        return [
            {
                "id": guest.id,
                "first_name": guest.first_name,
                "last_name": guest.last_name,
                "group_id": guest.group_id,
                "is_child": guest.is_child,
            }
            for guest in guests
        ]

    @staticmethod
    def get_seating_chart(db: Session) -> Dict:
        """Every table with its nickname, fill and guests, plus the unseated guests"""
        capacity = settings.TABLE_CAPACITY
        nicknames = TableRepo.list_nicknames(db, settings.TABLE_COUNT)

        by_table: Dict[int, List[Guest]] = {n: [] for n in nicknames}
        unseated: List[Guest] = []
        for guest in GuestRepo.list_all(db):
            if guest.table_number is None:
                unseated.append(guest)
            elif guest.table_number in by_table:
                by_table[guest.table_number].append(guest)

        def brief(guest: Guest) -> Dict:
            return {
                "id": guest.id,
                "first_name": guest.first_name,
                "last_name": guest.last_name,
                "group_id": guest.group_id,
                "group_name": guest.group.name if guest.group else None,
            }

        tables = []
        for number, seated in by_table.items():
            tables.append({
                "table_number": number,
                "nickname": nicknames[number],
                "filled": len(seated),
                "capacity": capacity,
                "available_seats": max(capacity - len(seated), 0),
                "guests": [brief(g) for g in seated],
            })

        return {
            "capacity": capacity,
            "total_seated": sum(t["filled"] for t in tables),
            "tables": tables,
            "unseated": [brief(g) for g in unseated],
        }
