"""
Repository layer abstracting storage behind the SQLAlchemy session.

Methods that make a complete change on their own commit; ``update_many`` and
``TableRepo.lock`` leave the transaction open so the seating engine can
combine them with its capacity check.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from wedding_planner.models import Group, Guest, SeatingTable


# -------- Guest repository --------

class GuestRepo:
    @staticmethod
    def get(db: Session, guest_id: int) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.id == guest_id).first()

    @staticmethod
    def find_by_ids(db: Session, guest_ids: Iterable[int]) -> List[Guest]:
        ids = list(guest_ids)
        if not ids:
            return []
        return db.query(Guest).filter(Guest.id.in_(ids)).all()

    @staticmethod
    def list_all(db: Session) -> List[Guest]:
        return (
            db.query(Guest)
            .options(selectinload(Guest.group))
            .order_by(Guest.last_name, Guest.first_name, Guest.id)
            .all()
        )

    @staticmethod
    def list_at_table(db: Session, table_number: int) -> List[Guest]:
        return (
            db.query(Guest)
            .filter(Guest.table_number == table_number)
            .order_by(Guest.last_name, Guest.first_name)
            .all()
        )

    @staticmethod
    def list_by_group(db: Session, group_id: int) -> List[Guest]:
        return db.query(Guest).filter(Guest.group_id == group_id).all()

    @staticmethod
    def count_at_table(db: Session, table_number: int, exclude_ids: Iterable[int] = ()) -> int:
        query = db.query(func.count(Guest.id)).filter(Guest.table_number == table_number)
        exclude = list(exclude_ids)
        if exclude:
            query = query.filter(Guest.id.notin_(exclude))
        return query.scalar()

    @staticmethod
    def count_by_table(db: Session) -> Dict[int, int]:
        rows = (
            db.query(Guest.table_number, func.count(Guest.id))
            .filter(Guest.table_number.isnot(None))
            .group_by(Guest.table_number)
            .all()
        )
        return {number: count for number, count in rows}

    @staticmethod
    def update_many(db: Session, guest_ids: Iterable[int], patch: Dict[str, Any]) -> int:
        """Apply ``patch`` to all ids in one UPDATE statement. Does not commit."""
        ids = list(guest_ids)
        if not ids:
            return 0
        values = {getattr(Guest, key): value for key, value in patch.items()}
        values[Guest.updated_at] = datetime.utcnow()
        return (
            db.query(Guest)
            .filter(Guest.id.in_(ids))
            .update(values, synchronize_session=False)
        )

    @staticmethod
    def create(db: Session, **fields) -> Guest:
        guest = Guest(**fields)
        db.add(guest)
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def update(db: Session, guest: Guest, patch: Dict[str, Any]) -> Guest:
        for key, value in patch.items():
            setattr(guest, key, value)
        guest.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def delete(db: Session, guest: Guest) -> None:
        db.delete(guest)
        db.commit()


# -------- Group repository --------

class GroupRepo:
    @staticmethod
    def get(db: Session, group_id: int, with_members: bool = True) -> Optional[Group]:
        query = db.query(Group).filter(Group.id == group_id)
        if with_members:
            query = query.options(selectinload(Group.guests))
        return query.first()

    @staticmethod
    def find_by_ids(db: Session, group_ids: Iterable[int]) -> List[Group]:
        ids = list(group_ids)
        if not ids:
            return []
        return (
            db.query(Group)
            .options(selectinload(Group.guests))
            .filter(Group.id.in_(ids))
            .order_by(Group.id)
            .all()
        )

    @staticmethod
    def list(db: Session) -> List[Group]:
        return (
            db.query(Group)
            .options(selectinload(Group.guests))
            .order_by(Group.created_at.desc(), Group.id.desc())
            .all()
        )

    @staticmethod
    def create(db: Session, fields: Dict[str, Any], members: List[Dict[str, Any]]) -> Group:
        group = Group(**fields)
        group.guests = [Guest(**member) for member in members]
        db.add(group)
        db.commit()
        db.refresh(group)
        return group

    @staticmethod
    def update(db: Session, group: Group, patch: Dict[str, Any]) -> Group:
        for key, value in patch.items():
            setattr(group, key, value)
        db.commit()
        db.refresh(group)
        return group

    @staticmethod
    def delete(db: Session, group: Group) -> None:
        db.delete(group)
        db.commit()


# -------- Table repository --------

class TableRepo:
    @staticmethod
    def get(db: Session, number: int) -> Optional[SeatingTable]:
        return db.query(SeatingTable).filter(SeatingTable.number == number).first()

    @staticmethod
    def get_nickname(db: Session, number: int) -> Optional[str]:
        table = TableRepo.get(db, number)
        return table.nickname if table else None

    @staticmethod
    def list_nicknames(db: Session, table_count: int) -> Dict[int, Optional[str]]:
        nicknames: Dict[int, Optional[str]] = {n: None for n in range(1, table_count + 1)}
        for table in db.query(SeatingTable).all():
            if table.number in nicknames:
                nicknames[table.number] = table.nickname
        return nicknames

    @staticmethod
    def upsert_nickname(db: Session, number: int, nickname: Optional[str]) -> SeatingTable:
        table = TableRepo.get(db, number)
        if table is None:
            table = SeatingTable(number=number, nickname=nickname)
            db.add(table)
        else:
            table.nickname = nickname
        db.commit()
        db.refresh(table)
        return table

    @staticmethod
    def ensure_rows(db: Session, table_count: int) -> None:
        existing = {number for (number,) in db.query(SeatingTable.number).all()}
        missing = [n for n in range(1, table_count + 1) if n not in existing]
        for number in missing:
            db.add(SeatingTable(number=number))
        if missing:
            db.commit()

    @staticmethod
    def lock(db: Session, number: int) -> None:
        """Take the write lock on a table's row for the rest of the transaction.

        The no-op UPDATE holds a row lock on servers and the database write
        lock on SQLite, so concurrent seating changes for the same table run
        one after another. Does not commit.
        """
        touched = (
            db.query(SeatingTable)
            .filter(SeatingTable.number == number)
            .update({SeatingTable.nickname: SeatingTable.nickname}, synchronize_session=False)
        )
        if not touched:
            db.add(SeatingTable(number=number))
            db.flush()
