"""
Excel exports of the guest list and catering reports
"""

import io
from typing import Dict, List

import pandas as pd
from sqlalchemy.orm import Session

from wedding_planner.services.report_service import ReportService, UNASSIGNED
from wedding_planner.services.repositories import GuestRepo

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

class ExcelService:
    """Service for building .xlsx downloads"""

    GUEST_COLUMNS = [
        'Title', 'First Name', 'Last Name', 'Group', 'Email', 'Phone',
        'RSVP', 'Table', 'Food Selection', 'Dietary Restrictions', 'Type'
    ]

    @staticmethod
    def _to_bytes(df: pd.DataFrame, sheet_name: str) -> bytes:
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=sheet_name)
        return buffer.getvalue()

    @staticmethod
    def guest_rows(db: Session) -> List[Dict]:
        rows = []
        for guest in GuestRepo.list_all(db):
            rows.append({
                'Title': guest.title or '',
                'First Name': guest.first_name,
                'Last Name': guest.last_name,
                'Group': guest.group.name if guest.group and guest.group.name else '',
                'Email': guest.email or '',
                'Phone': guest.phone or '',
                'RSVP': guest.rsvp_status.value,
                'Table': guest.table_number if guest.table_number is not None else UNASSIGNED,
                'Food Selection': guest.food_selection or '',
                'Dietary Restrictions': guest.dietary_restrictions or '',
                'Type': 'Child' if guest.is_child else 'Adult',
            })
        return rows

    @staticmethod
    def export_guest_list(db: Session) -> bytes:
        """Every guest with RSVP, table and meal details"""
        df = pd.DataFrame(ExcelService.guest_rows(db), columns=ExcelService.GUEST_COLUMNS)
        return ExcelService._to_bytes(df, 'Guest List')

    @staticmethod
    def export_meal_orders(db: Session) -> bytes:
        """One row per table with the meal counts the caterer needs"""
        data = []
        for row in ReportService.table_meal_breakdown(db):
            data.append({'Table': row['table'], **row['meals']})
        df = pd.DataFrame(data)
        return ExcelService._to_bytes(df, 'Meal Orders')

    @staticmethod
    def export_allergy_report(db: Session) -> bytes:
        data = [
            {
                'Guest': item['guest'],
                'Group': item['group'] or 'No Group',
                'Email': item['email'] or 'No email',
                'Table': f"Table {item['table_number']}" if item['table_number'] else UNASSIGNED,
                'Food Selection': item['food_selection'] or 'Not specified',
                'Dietary Restrictions': item['dietary_restrictions'] or 'None specified',
                'Type': 'Child' if item['is_child'] else 'Adult',
            }
            for item in ReportService.allergy_report(db)
        ]
        df = pd.DataFrame(data, columns=['Guest', 'Group', 'Email', 'Table', 'Food Selection', 'Dietary Restrictions', 'Type'])
        return ExcelService._to_bytes(df, 'Food Allergies')
