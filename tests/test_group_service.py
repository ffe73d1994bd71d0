"""
Tests for group and guest management
"""

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from wedding_planner.core.db import Base
from wedding_planner.core.exceptions import (
    CapacityExceededError,
    GroupNotFoundError,
    GuestsNotFoundError,
    InvalidTableError,
    ValidationError,
)
from wedding_planner.models import Group, Guest, RSVPStatus
from wedding_planner.schemas.group import GroupCreate, GroupUpdate
from wedding_planner.schemas.guest import GuestCreate, GuestUpdate, RSVPReply
from wedding_planner.services.group_service import GroupService
from wedding_planner.services.guest_service import GuestService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_groups.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

def group_payload(**overrides):
    data = {
        "name": "The Garcias",
        "street": "12 Orchard Lane",
        "city": "Springfield",
        "state": "IL",
        "postal_code": "62704",
        "email": "garcias@example.com",
        "members": [
            {"first_name": "Luis", "last_name": "Garcia"},
            {"first_name": "Maria", "last_name": "Garcia", "email": "maria@example.com"},
        ],
    }
    data.update(overrides)
    return GroupCreate(**data)

def seat_filler(db, table_number, count):
    db.add_all([
        Guest(first_name=f"Filler{i}", last_name="Guest", table_number=table_number)
        for i in range(count)
    ])
    db.commit()

def test_create_group_with_members(db_session):
    group = GroupService.create_group(group_payload(), db_session)

    assert group.id is not None
    assert group.city == "Springfield"
    assert [g.first_name for g in group.guests] == ["Luis", "Maria"]
    assert all(g.rsvp_status == RSVPStatus.PENDING for g in group.guests)
    assert all(g.table_number is None for g in group.guests)

def test_create_group_strips_blank_fields(db_session):
    group = GroupService.create_group(group_payload(name="  Garcias  ", country="   "), db_session)

    assert group.name == "Garcias"
    assert group.country is None

def test_create_group_requires_members():
    with pytest.raises(SchemaValidationError):
        GroupCreate(name="Empty", members=[])

@pytest.mark.parametrize("field,value", [
    ("phone", "call me"),
    ("postal_code", "!!!"),
    ("email", "not-an-email"),
])
def test_group_contact_fields_validated(field, value):
    with pytest.raises(SchemaValidationError):
        group_payload(**{field: value})

def test_partial_address_rejected(db_session):
    with pytest.raises(ValidationError) as exc_info:
        GroupService.create_group(group_payload(street=None), db_session)

    assert "street is required when an address is given" in exc_info.value.details
    assert db_session.query(Group).count() == 0

def test_group_without_address_is_fine(db_session):
    group = GroupService.create_group(
        group_payload(street=None, city=None, state=None, postal_code=None),
        db_session,
    )
    assert group.street is None

def test_create_group_checks_table_capacity(db_session):
    seat_filler(db_session, 7, 9)
    payload = group_payload(members=[
        {"first_name": "Luis", "last_name": "Garcia", "table_number": 7},
        {"first_name": "Maria", "last_name": "Garcia", "table_number": 7},
    ])

    with pytest.raises(CapacityExceededError) as exc_info:
        GroupService.create_group(payload, db_session)

    assert exc_info.value.current == 9
    assert exc_info.value.requested == 2
    assert db_session.query(Group).count() == 0
    assert db_session.query(Guest).filter(Guest.table_number == 7).count() == 9

def test_create_group_seats_members(db_session):
    seat_filler(db_session, 7, 8)
    payload = group_payload(members=[
        {"first_name": "Luis", "last_name": "Garcia", "table_number": 7},
        {"first_name": "Maria", "last_name": "Garcia", "table_number": 7},
    ])

    group = GroupService.create_group(payload, db_session)

    assert {g.table_number for g in group.guests} == {7}
    assert db_session.query(Guest).filter(Guest.table_number == 7).count() == 10

def test_create_group_rejects_bad_table(db_session):
    payload = group_payload(members=[{"first_name": "Luis", "last_name": "Garcia", "table_number": 25}])

    with pytest.raises(InvalidTableError):
        GroupService.create_group(payload, db_session)

def test_update_group_changes_only_sent_fields(db_session):
    group = GroupService.create_group(group_payload(), db_session)

    updated = GroupService.update_group(group.id, GroupUpdate(name="Garcia Family"), db_session)

    assert updated.name == "Garcia Family"
    assert updated.city == "Springfield"
    assert updated.email == "garcias@example.com"

def test_update_group_cannot_drop_city(db_session):
    group = GroupService.create_group(group_payload(), db_session)

    with pytest.raises(ValidationError):
        GroupService.update_group(group.id, GroupUpdate(city=""), db_session)

def test_update_unknown_group(db_session):
    with pytest.raises(GroupNotFoundError):
        GroupService.update_group(404, GroupUpdate(name="Nobody"), db_session)

def test_delete_group_removes_members(db_session):
    group = GroupService.create_group(group_payload(), db_session)

    GroupService.delete_group(group.id, db_session)

    assert db_session.query(Group).count() == 0
    assert db_session.query(Guest).count() == 0
    with pytest.raises(GroupNotFoundError):
        GroupService.get_group(group.id, db_session)

def test_create_guest_in_group(db_session):
    group = GroupService.create_group(group_payload(), db_session)

    guest = GuestService.create_guest(
        GuestCreate(group_id=group.id, first_name="Ana", last_name="Garcia", is_child=True, table_number="3"),
        db_session,
    )

    assert guest.group_id == group.id
    assert guest.table_number == 3
    assert guest.is_child is True

def test_create_guest_unknown_group(db_session):
    with pytest.raises(GroupNotFoundError):
        GuestService.create_guest(GuestCreate(group_id=99, first_name="Ana", last_name="Garcia"), db_session)

def test_create_guest_at_full_table(db_session):
    seat_filler(db_session, 1, 10)

    with pytest.raises(CapacityExceededError):
        GuestService.create_guest(GuestCreate(first_name="Late", last_name="Comer", table_number=1), db_session)
    assert db_session.query(Guest).count() == 10

def test_update_guest_moves_table_through_seating(db_session):
    seat_filler(db_session, 6, 10)
    guest = GuestService.create_guest(GuestCreate(first_name="Ana", last_name="Garcia"), db_session)

    with pytest.raises(CapacityExceededError):
        GuestService.update_guest(guest.id, GuestUpdate(table_number=6, phone="555-0100"), db_session)

    db_session.expire_all()
    unchanged = GuestService.get_guest(guest.id, db_session)
    assert unchanged.table_number is None
    assert unchanged.phone is None

    moved = GuestService.update_guest(guest.id, GuestUpdate(table_number=8, phone="555-0100"), db_session)
    assert moved.table_number == 8
    assert moved.phone == "555-0100"

def test_update_guest_clears_table(db_session):
    guest = GuestService.create_guest(GuestCreate(first_name="Ana", last_name="Garcia", table_number=2), db_session)

    updated = GuestService.update_guest(guest.id, GuestUpdate(table_number=None), db_session)

    assert updated.table_number is None

def test_update_guest_validates_before_moving(db_session):
    guest = GuestService.create_guest(GuestCreate(first_name="Ana", last_name="Garcia"), db_session)

    with pytest.raises(ValidationError):
        GuestService.update_guest(guest.id, GuestUpdate(table_number=4, food_selection="Lobster"), db_session)

    db_session.expire_all()
    assert GuestService.get_guest(guest.id, db_session).table_number is None

def test_update_guest_rejects_blank_name(db_session):
    guest = GuestService.create_guest(GuestCreate(first_name="Ana", last_name="Garcia"), db_session)

    with pytest.raises(ValidationError):
        GuestService.update_guest(guest.id, GuestUpdate(first_name="   "), db_session)

def test_update_unknown_guest(db_session):
    with pytest.raises(GuestsNotFoundError) as exc_info:
        GuestService.update_guest(12345, GuestUpdate(phone="555-0100"), db_session)
    assert exc_info.value.missing_ids == [12345]

def test_rsvp_yes_records_meal(db_session):
    guest = GuestService.create_guest(GuestCreate(first_name="Ana", last_name="Garcia"), db_session)

    replied = GuestService.submit_rsvp(
        guest.id,
        RSVPReply(rsvp_status="YES", food_selection="Fish", dietary_restrictions=" shellfish allergy ", email="ana@example.com"),
        db_session,
    )

    assert replied.rsvp_status == RSVPStatus.YES
    assert replied.food_selection == "Fish"
    assert replied.dietary_restrictions == "shellfish allergy"
    assert replied.email == "ana@example.com"

def test_rsvp_no_clears_meal(db_session):
    guest = GuestService.create_guest(GuestCreate(first_name="Ana", last_name="Garcia"), db_session)
    GuestService.submit_rsvp(guest.id, RSVPReply(rsvp_status="YES", food_selection="Beef"), db_session)

    replied = GuestService.submit_rsvp(guest.id, RSVPReply(rsvp_status="NO", food_selection="Beef"), db_session)

    assert replied.rsvp_status == RSVPStatus.NO
    assert replied.food_selection is None

def test_rsvp_rejects_unknown_meal(db_session):
    guest = GuestService.create_guest(GuestCreate(first_name="Ana", last_name="Garcia"), db_session)

    with pytest.raises(ValidationError):
        GuestService.submit_rsvp(guest.id, RSVPReply(rsvp_status="YES", food_selection="Lobster"), db_session)

def test_delete_guest(db_session):
    guest = GuestService.create_guest(GuestCreate(first_name="Ana", last_name="Garcia"), db_session)

    GuestService.delete_guest(guest.id, db_session)

    with pytest.raises(GuestsNotFoundError):
        GuestService.get_guest(guest.id, db_session)
