"""
Admin authentication and rate limiting for the guest-facing routes
"""

import logging
import secrets
import time
from typing import Dict, List, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wedding_planner.core.config import settings
from wedding_planner.utils.responses import rate_limit_error

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60

# client ip -> request times inside the current window
rate_limiter: Dict[str, List[float]] = {}

security = HTTPBearer()

def verify_admin_token(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Reject admin calls whose bearer token does not match ADMIN_TOKEN"""
    if not secrets.compare_digest(credentials.credentials, settings.ADMIN_TOKEN):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token"
        )
    return credentials.credentials

def prune_rate_limiter(now: Optional[float] = None) -> None:
    """Forget clients with no requests left in the window"""
    if now is None:
        now = time.time()
    cutoff = now - WINDOW_SECONDS
    for client_ip in list(rate_limiter):
        recent = [t for t in rate_limiter[client_ip] if t > cutoff]
        if recent:
            rate_limiter[client_ip] = recent
        else:
            del rate_limiter[client_ip]

def rate_limit_check(client_ip: str, limit: Optional[int] = None, now: Optional[float] = None) -> bool:
    """Sliding one-minute window per client; True when the request may proceed"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE
    if now is None:
        now = time.time()

    prune_rate_limiter(now)
    recent = rate_limiter.get(client_ip, [])
    if len(recent) >= limit:
        return False

    rate_limiter[client_ip] = recent + [now]
    return True

def get_client_ip(request: Request) -> str:
    """Address to rate limit by.

    Forwarding headers are only read when the direct peer is one of
    TRUSTED_PROXIES; otherwise anyone could pick their own address.
    """
    peer = request.client.host if request.client else "unknown"
    if peer not in settings.TRUSTED_PROXIES:
        return peer

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # Rightmost hop not added by one of our own proxies
        hops = [hop.strip() for hop in forwarded_for.split(",") if hop.strip()]
        for hop in reversed(hops):
            if hop not in settings.TRUSTED_PROXIES:
                return hop

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return peer

def enforce_rate_limit(request: Request) -> None:
    """Dependency for public endpoints that guests hit directly"""
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
        rate_limit_error()
