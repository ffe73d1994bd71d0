"""
Guest search for the RSVP and seating pages
"""

import re
from typing import Dict, List, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session, selectinload

from wedding_planner.core.config import settings
from wedding_planner.models import Group, Guest
from wedding_planner.schemas.group import SearchGroup
from wedding_planner.schemas.guest import SearchGuest
from wedding_planner.services.nicknames import alias_set

TOKEN_SPLIT = re.compile(r"[\s,.]+")

def tokenize(query: str) -> List[str]:
    return [t for t in TOKEN_SPLIT.split(query or "") if t]

def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

class SearchService:
    """Resolve free-text name queries to groups of guests"""

    @staticmethod
    def find_guests(query: str, db: Session, limit: Optional[int] = None) -> List[Guest]:
        """Guests whose names plausibly match the query, capped at ``limit`` rows.

        Two or more tokens are read as a first/last name pair in either order,
        with nickname aliases on the first name. A single token matches part
        of the first or last name, or a nickname of the first name.
        """
        if limit is None:
            limit = settings.SEARCH_RESULT_LIMIT

        tokens = tokenize(query)
        if not tokens:
            return []

        first_name = func.lower(Guest.first_name)
        last_name = func.lower(Guest.last_name)

        if len(tokens) >= 2:
            first_piece = tokens[0].lower()
            last_piece = tokens[-1].lower()
            condition = or_(
                and_(first_name.in_(sorted(alias_set(first_piece))), last_name == last_piece),
                and_(first_name.in_(sorted(alias_set(last_piece))), last_name == first_piece),
            )
        else:
            term = tokens[0].lower()
            pattern = f"%{_escape_like(term)}%"
            condition = or_(
                first_name.like(pattern, escape="\\"),
                first_name.in_(sorted(alias_set(term))),
                last_name.like(pattern, escape="\\"),
            )

        return (
            db.query(Guest)
            .options(selectinload(Guest.group).selectinload(Group.guests))
            .filter(condition)
            .order_by(Guest.last_name, Guest.first_name, Guest.id)
            .limit(limit)
            .all()
        )

    @staticmethod
    def search(query: str, db: Session) -> List[Dict]:
        """Matching groups, each once and with all of its members.

        Guests without a group are returned as a group of one keyed
        ``guest-<id>``.
        """
        results: Dict[str, SearchGroup] = {}
        for guest in SearchService.find_guests(query, db):
            if guest.group is not None:
                key = str(guest.group.id)
                if key not in results:
                    results[key] = SearchGroup(
                        id=key,
                        name=guest.group.name,
                        guests=[SearchGuest.model_validate(m) for m in guest.group.guests],
                    )
            else:
                key = f"guest-{guest.id}"
                if key not in results:
                    results[key] = SearchGroup(
                        id=key,
                        name=f"{guest.first_name} {guest.last_name}",
                        guests=[SearchGuest.model_validate(guest)],
                    )

        return [group.model_dump(mode="json") for group in results.values()]
