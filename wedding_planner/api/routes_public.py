"""
Public API routes - no authentication required
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wedding_planner.core.config import settings
from wedding_planner.core.db import get_db
from wedding_planner.services.floor_layout_service import FloorLayoutStore, get_floor_layout_store
from wedding_planner.services.repositories import TableRepo
from wedding_planner.services.seating_service import SeatingService
from wedding_planner.utils.responses import success_response

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/tables")
async def get_table_nicknames(db: Session = Depends(get_db)):
    """Nicknames for every table number"""
    nicknames = TableRepo.list_nicknames(db, settings.TABLE_COUNT)
    return success_response(
        message="Table nicknames retrieved",
        data={"nicknames": nicknames, "capacity": settings.TABLE_CAPACITY}
    )

@router.get("/tables/{number}")
async def get_table(number: str, db: Session = Depends(get_db)):
    """One table's nickname and the guests seated there"""
    table_number = SeatingService.normalize_table_number(number)
    return success_response(
        message="Table retrieved",
        data={
            "number": table_number,
            "nickname": TableRepo.get_nickname(db, table_number),
            "guests": SeatingService.get_table_guests(table_number, db),
        }
    )

@router.get("/floor-layout")
async def get_floor_layout(store: FloorLayoutStore = Depends(get_floor_layout_store)):
    """Saved table positions, normalized to the unit square"""
    return success_response(
        message="Floor layout retrieved",
        data={"layout": store.load()}
    )

@router.get("/seating")
async def get_seating_chart(db: Session = Depends(get_db)):
    """Who sits at which table"""
    return success_response(
        message="Seating chart retrieved",
        data=SeatingService.get_seating_chart(db)
    )
