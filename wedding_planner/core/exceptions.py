"""
Domain errors raised by the services.

Each error knows the HTTP status and machine-readable code it maps to, so the
application-level handler can turn it into an ``ErrorResponse`` without the
routes having to catch anything.
"""

from typing import Any, Iterable, Optional


class WeddingPlannerError(Exception):
    """Base class for errors shown to the caller"""

    status_code = 400
    error_code = "error"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidTableError(WeddingPlannerError):
    status_code = 400
    error_code = "invalid_table"

    def __init__(self, value: Any, table_count: int):
        super().__init__(
            f"tableNumber must be an integer between 1 and {table_count}",
            details={"table_number": value},
        )
        self.value = value


class GuestsNotFoundError(WeddingPlannerError):
    status_code = 404
    error_code = "guests_not_found"

    def __init__(self, missing_ids: Iterable[int]):
        self.missing_ids = sorted(missing_ids)
        super().__init__("Guests not found", details={"guest_ids": self.missing_ids})


class GroupNotFoundError(WeddingPlannerError):
    status_code = 404
    error_code = "group_not_found"

    def __init__(self, group_id: int):
        super().__init__("Group not found", details={"group_id": group_id})
        self.group_id = group_id


class CapacityExceededError(WeddingPlannerError):
    status_code = 409
    error_code = "capacity_exceeded"

    def __init__(self, table_number: int, current: int, requested: int, capacity: int):
        super().__init__(
            f"Not enough seats at table {table_number}. {current}/{capacity} filled.",
            details={
                "table_number": table_number,
                "current": current,
                "requested": requested,
                "capacity": capacity,
            },
        )
        self.table_number = table_number
        self.current = current
        self.requested = requested
        self.capacity = capacity


class ValidationError(WeddingPlannerError):
    status_code = 422
    error_code = "validation_error"

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message, details=errors or [])
        self.errors = errors or []
