"""
Guest-facing RSVP routes
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from wedding_planner.core.db import get_db
from wedding_planner.schemas.guest import GuestResponse, RSVPReply
from wedding_planner.services.guest_service import GuestService
from wedding_planner.services.search_service import SearchService
from wedding_planner.utils.responses import success_response
from wedding_planner.utils.security import enforce_rate_limit

router = APIRouter(dependencies=[Depends(enforce_rate_limit)])

@router.get("/search")
async def search_invitations(
    q: str = Query("", max_length=200),
    db: Session = Depends(get_db)
):
    """Find the groups a guest may belong to by (nick)name"""
    groups = SearchService.search(q.strip(), db)
    return success_response(
        message=f"{len(groups)} matching groups",
        data={"groups": groups}
    )

@router.patch("/guests/{guest_id}")
async def submit_rsvp(
    guest_id: int,
    reply: RSVPReply,
    db: Session = Depends(get_db)
):
    """Record one guest's RSVP answer"""
    guest = GuestService.submit_rsvp(guest_id, reply, db)
    return success_response(
        message="RSVP saved",
        data={"guest": GuestResponse.model_validate(guest)}
    )
