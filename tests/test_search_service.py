"""
Tests for nickname-aware guest search
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from wedding_planner.core.db import Base
from wedding_planner.models import Group, Guest, RSVPStatus
from wedding_planner.services.nicknames import NICKNAMES, alias_set
from wedding_planner.services.search_service import SearchService, tokenize

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_search.db"
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

@pytest.fixture
def guest_list(db_session):
    """Two families and a few guests invited on their own"""
    smiths = Group(name="The Smith Family")
    smiths.guests = [
        Guest(first_name="Robert", last_name="Smith", rsvp_status=RSVPStatus.YES, table_number=4),
        Guest(first_name="Jane", last_name="Smith"),
        Guest(first_name="John", last_name="Smith", is_child=True),
    ]
    does = Group(name="Doe Household")
    does.guests = [
        Guest(first_name="John", last_name="Doe"),
        Guest(first_name="Elizabeth", last_name="Doe", dietary_restrictions="nut allergy"),
    ]
    db_session.add_all([
        smiths,
        does,
        Guest(first_name="Katherine", last_name="Miller"),
        Guest(first_name="Johnny", last_name="Appleseed"),
        Guest(first_name="Sam", last_name="Johnson"),
    ])
    db_session.commit()
    return {"smiths": smiths, "does": does}

def names(group):
    return sorted(f"{g['first_name']} {g['last_name']}" for g in group["guests"])

def test_alias_set_includes_whole_class():
    assert {"bob", "robert", "rob", "bobby", "robbie"} <= alias_set("bob")
    assert "bob" in alias_set("Robert")
    assert alias_set("  MATT ") == {"matt", "matthew"}

def test_alias_set_unknown_name_is_itself():
    assert alias_set("Zebulon") == {"zebulon"}

def test_alias_set_includes_reverse_entries():
    # "robbie" has no entry of its own but is listed under robert
    aliases = alias_set("robbie")
    assert {"robbie", "robert", "rob", "bob", "bobby"} <= aliases

def test_alias_set_covers_declared_entries():
    for name, values in NICKNAMES.items():
        assert alias_set(name) >= {name, *values}

def test_tokenize():
    assert tokenize("Smith, John") == ["Smith", "John"]
    assert tokenize("  J. R.  Smith ") == ["J", "R", "Smith"]
    assert tokenize(" ,. ") == []

def test_nickname_and_last_name(db_session, guest_list):
    results = SearchService.search("bob smith", db_session)

    assert len(results) == 1
    assert results[0]["id"] == str(guest_list["smiths"].id)
    assert results[0]["name"] == "The Smith Family"
    # Full family comes back, not just the matching guest
    assert names(results[0]) == ["Jane Smith", "John Smith", "Robert Smith"]

@pytest.mark.parametrize("query", ["John Smith", "Smith John", "Smith, John", "john. smith", "JOHN SMITH"])
def test_name_order_and_punctuation(db_session, guest_list, query):
    results = SearchService.search(query, db_session)
    assert [r["id"] for r in results] == [str(guest_list["smiths"].id)]

def test_middle_tokens_ignored(db_session, guest_list):
    results = SearchService.search("Robert Q. Smith", db_session)
    assert [r["name"] for r in results] == ["The Smith Family"]

def test_two_tokens_need_exact_last_name(db_session, guest_list):
    assert SearchService.search("Robert Smit", db_session) == []

def test_single_token_substring_and_last_name(db_session, guest_list):
    results = SearchService.search("john", db_session)

    by_name = {r["name"]: r for r in results}
    assert set(by_name) == {"The Smith Family", "Doe Household", "Johnny Appleseed", "Sam Johnson"}
    assert by_name["Johnny Appleseed"]["id"].startswith("guest-")

def test_single_token_nickname(db_session, guest_list):
    results = SearchService.search("Kate", db_session)

    assert len(results) == 1
    assert results[0]["name"] == "Katherine Miller"
    assert len(results[0]["guests"]) == 1

def test_family_listed_once(db_session, guest_list):
    results = SearchService.search("smith", db_session)
    assert len(results) == 1
    assert len(results[0]["guests"]) == 3

def test_result_guest_fields(db_session, guest_list):
    results = SearchService.search("liz doe", db_session)

    assert len(results) == 1
    liz = next(g for g in results[0]["guests"] if g["first_name"] == "Elizabeth")
    assert liz["dietary_restrictions"] == "nut allergy"
    assert liz["rsvp_status"] == "PENDING"
    assert liz["table_number"] is None
    assert liz["is_child"] is False

def test_empty_and_wildcard_queries(db_session, guest_list):
    assert SearchService.search("", db_session) == []
    assert SearchService.search("   ", db_session) == []
    assert SearchService.search("%", db_session) == []
    assert SearchService.search("_", db_session) == []

def test_no_match(db_session, guest_list):
    assert SearchService.search("Nobody Here", db_session) == []

def test_result_rows_capped(db_session):
    db_session.add_all([Guest(first_name=f"Guest{i:02d}", last_name="Crowd") for i in range(60)])
    db_session.commit()

    assert len(SearchService.find_guests("crowd", db_session)) == 50
    assert len(SearchService.search("crowd", db_session)) == 50
