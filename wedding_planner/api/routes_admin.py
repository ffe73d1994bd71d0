"""
Admin API routes - requires authentication
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from wedding_planner.api.ws import websocket_manager
from wedding_planner.core.config import settings
from wedding_planner.core.db import get_db
from wedding_planner.models import RSVPStatus
from wedding_planner.schemas.group import GroupCreate, GroupResponse, GroupUpdate
from wedding_planner.schemas.guest import GuestCreate, GuestResponse, GuestUpdate
from wedding_planner.schemas.seating import FloorLayoutUpdate, SeatingRequest, TableNicknameUpdate
from wedding_planner.services.excel_service import ExcelService, XLSX_MEDIA_TYPE
from wedding_planner.services.floor_layout_service import FloorLayoutStore, get_floor_layout_store
from wedding_planner.services.group_service import GroupService
from wedding_planner.services.guest_service import GuestService
from wedding_planner.services.report_service import GuestFilter, ReportService, filter_guests
from wedding_planner.services.seating_service import AssignmentResult, SeatingService
from wedding_planner.utils.responses import success_response
from wedding_planner.utils.security import verify_admin_token

router = APIRouter(dependencies=[Depends(verify_admin_token)])

def _group_data(group) -> dict:
    return GroupResponse.model_validate(group).model_dump(mode="json")

def _assignment_data(result: AssignmentResult) -> dict:
    return {
        "table_number": result.table_number,
        "guest_ids": result.guest_ids,
        "groups": [_group_data(g) for g in result.groups],
        "guests": [GuestResponse.model_validate(g).model_dump(mode="json") for g in result.ungrouped_guests],
    }

def _xlsx(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )

# -------- Groups --------

@router.get("/groups")
async def list_groups(db: Session = Depends(get_db)):
    """All groups with their members, newest first"""
    groups = GroupService.list_groups(db)
    return success_response(
        message="Groups retrieved successfully",
        data={"groups": [_group_data(g) for g in groups]}
    )

@router.post("/groups")
async def create_group(data: GroupCreate, db: Session = Depends(get_db)):
    """Create a group together with its members"""
    group = GroupService.create_group(data, db)
    return success_response(
        message="Group created successfully",
        data={"group": _group_data(group)},
        status_code=201
    )

@router.patch("/groups/{group_id}")
async def update_group(group_id: int, data: GroupUpdate, db: Session = Depends(get_db)):
    """Rename a group or change its address and contact details"""
    group = GroupService.update_group(group_id, data, db)
    return success_response(
        message="Group updated successfully",
        data={"group": _group_data(group)}
    )

@router.delete("/groups/{group_id}")
async def delete_group(group_id: int, db: Session = Depends(get_db)):
    """Delete a group and all of its members"""
    GroupService.delete_group(group_id, db)
    return success_response(
        message="Group deleted successfully",
        data={"deleted_group_id": group_id}
    )

# -------- Guests --------

@router.get("/guests")
async def list_guests(
    rsvp_status: Optional[RSVPStatus] = Query(None),
    table_number: Optional[int] = Query(None, ge=1, le=settings.TABLE_COUNT),
    unassigned_only: bool = Query(False),
    has_dietary: Optional[bool] = Query(None),
    is_child: Optional[bool] = Query(None),
    group_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """List guests, optionally narrowed by RSVP, table, diet and name"""
    criteria = GuestFilter(
        rsvp_status=rsvp_status,
        table_number=table_number,
        unassigned_only=unassigned_only,
        has_dietary=has_dietary,
        is_child=is_child,
        group_id=group_id,
        query=search,
    )
    guests = filter_guests(GuestService.list_guests(db), criteria)
    return success_response(
        message="Guests retrieved successfully",
        data={
            "guests": [GuestResponse.model_validate(g).model_dump(mode="json") for g in guests],
            "total": len(guests),
        }
    )

@router.post("/guests")
async def create_guest(data: GuestCreate, db: Session = Depends(get_db)):
    """Add a guest, on their own or to an existing group"""
    guest = GuestService.create_guest(data, db)
    if guest.table_number is not None:
        await websocket_manager.broadcast_seating_update(guest.table_number, [guest.id])
    return success_response(
        message="Guest created successfully",
        data={"guest": GuestResponse.model_validate(guest)},
        status_code=201
    )

@router.patch("/guests/{guest_id}")
async def update_guest(guest_id: int, data: GuestUpdate, db: Session = Depends(get_db)):
    """Update guest information; table changes are capacity-checked"""
    guest = GuestService.update_guest(guest_id, data, db)
    if "table_number" in data.model_fields_set:
        await websocket_manager.broadcast_seating_update(guest.table_number, [guest.id])
    return success_response(
        message="Guest updated successfully",
        data={"guest": GuestResponse.model_validate(guest)}
    )

@router.delete("/guests/{guest_id}")
async def delete_guest(guest_id: int, db: Session = Depends(get_db)):
    """Remove a guest"""
    GuestService.delete_guest(guest_id, db)
    return success_response(
        message="Guest deleted successfully",
        data={"deleted_guest_id": guest_id}
    )

# -------- Seating --------

@router.post("/seating")
async def update_seating(request: SeatingRequest, db: Session = Depends(get_db)):
    """Seat or unseat a whole group, a list of guests, or part of a group.

    ``table_number`` of null clears the assignment.
    """
    if request.group_id is not None and request.guest_ids is not None:
        result = SeatingService.assign_subset_of_group(
            request.group_id, request.guest_ids, request.table_number, db
        )
    elif request.guest_ids is not None:
        result = SeatingService.assign(request.table_number, request.guest_ids, db)
    else:
        result = SeatingService.assign_whole_group(request.group_id, request.table_number, db)

    await websocket_manager.broadcast_seating_update(result.table_number, result.guest_ids)

    return success_response(
        message="Seating updated" if result.table_number else "Seating cleared",
        data=_assignment_data(result)
    )

@router.post("/tables")
async def set_table_nickname(data: TableNicknameUpdate, db: Session = Depends(get_db)):
    """Set or clear a table's nickname"""
    table = SeatingService.set_table_nickname(data.number, data.nickname, db)
    return success_response(
        message="Table nickname saved",
        data={"number": table.number, "nickname": table.nickname}
    )

@router.put("/floor-layout")
async def save_floor_layout(
    data: FloorLayoutUpdate,
    store: FloorLayoutStore = Depends(get_floor_layout_store)
):
    """Replace the saved floor layout"""
    layout = store.save(data.layout)
    return success_response(
        message="Floor layout saved successfully",
        data={"layout": layout}
    )

# -------- Reports --------

@router.get("/reports/rsvp")
async def rsvp_report(db: Session = Depends(get_db)):
    return success_response(message="RSVP summary", data=ReportService.rsvp_summary(db))

@router.get("/reports/meals")
async def meal_report(db: Session = Depends(get_db)):
    """Meal counts overall and per table for confirmed guests"""
    return success_response(
        message="Meal report",
        data={
            "overall": ReportService.meal_counts(db),
            "tables": ReportService.table_meal_breakdown(db),
        }
    )

@router.get("/reports/allergies")
async def allergy_report(db: Session = Depends(get_db)):
    guests = ReportService.allergy_report(db)
    return success_response(
        message="Allergy report",
        data={"guests": guests, "total": len(guests)}
    )

# -------- Exports --------

@router.get("/export/guests.xlsx")
async def export_guests(db: Session = Depends(get_db)):
    return _xlsx(ExcelService.export_guest_list(db), "guest-list.xlsx")

@router.get("/export/meals.xlsx")
async def export_meals(db: Session = Depends(get_db)):
    return _xlsx(ExcelService.export_meal_orders(db), "meal-orders.xlsx")

@router.get("/export/allergies.xlsx")
async def export_allergies(db: Session = Depends(get_db)):
    return _xlsx(ExcelService.export_allergy_report(db), "food-allergies-report.xlsx")
