"""
Standardized response utilities
"""

from typing import Any, Optional
from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from wedding_planner.core.exceptions import WeddingPlannerError
from wedding_planner.schemas.common import StandardResponse, ErrorResponse

def success_response(
    message: str,
    data: Any = None,
    status_code: int = 200
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(
        success=True,
        message=message,
        data=jsonable_encoder(data)
    )
    return JSONResponse(
        content=response.model_dump(),
        status_code=status_code
    )

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        message=message,
        error_code=error_code,
        details=jsonable_encoder(details)
    )
    return JSONResponse(
        content=response.model_dump(),
        status_code=status_code
    )

def domain_error_response(error: WeddingPlannerError) -> JSONResponse:
    """Render a service-layer error for the caller"""
    return error_response(
        message=error.message,
        error_code=error.error_code,
        details=error.details,
        status_code=error.status_code
    )

def rate_limit_error():
    """Create rate limit error"""
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="Rate limit exceeded. Please try again later."
    )
