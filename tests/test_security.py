"""
Tests for admin token checks, client addresses and rate limiting
"""

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from wedding_planner.core.config import settings
from wedding_planner.utils.security import (
    WINDOW_SECONDS,
    get_client_ip,
    rate_limit_check,
    rate_limiter,
    verify_admin_token,
)

@pytest.fixture(autouse=True)
def clean_limiter():
    rate_limiter.clear()
    yield
    rate_limiter.clear()

def make_request(peer, headers=None):
    return Request({
        "type": "http",
        "method": "GET",
        "path": "/rsvp/search",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": (peer, 50000),
    })

def test_admin_token():
    good = HTTPAuthorizationCredentials(scheme="Bearer", credentials=settings.ADMIN_TOKEN)
    assert verify_admin_token(good) == settings.ADMIN_TOKEN

    with pytest.raises(HTTPException) as exc_info:
        verify_admin_token(HTTPAuthorizationCredentials(scheme="Bearer", credentials="nope"))
    assert exc_info.value.status_code == 401

def test_limit_per_window():
    assert rate_limit_check("1.1.1.1", limit=2, now=1000.0)
    assert rate_limit_check("1.1.1.1", limit=2, now=1001.0)
    assert not rate_limit_check("1.1.1.1", limit=2, now=1002.0)
    # Other clients have their own window
    assert rate_limit_check("2.2.2.2", limit=2, now=1002.0)
    # Oldest request has aged out
    assert rate_limit_check("1.1.1.1", limit=2, now=1000.0 + WINDOW_SECONDS + 0.5)

def test_idle_clients_are_forgotten():
    for i in range(50):
        rate_limit_check(f"10.0.0.{i}", limit=5, now=1000.0)
    assert len(rate_limiter) == 50

    rate_limit_check("9.9.9.9", limit=5, now=1000.0 + WINDOW_SECONDS + 1)

    assert list(rate_limiter) == ["9.9.9.9"]

def test_forwarded_headers_ignored_from_untrusted_peer(monkeypatch):
    monkeypatch.setattr(settings, "TRUSTED_PROXIES", [])
    request = make_request("203.0.113.7", {"X-Forwarded-For": "1.2.3.4", "X-Real-IP": "5.6.7.8"})

    assert get_client_ip(request) == "203.0.113.7"

def test_forwarded_headers_used_behind_trusted_proxy(monkeypatch):
    monkeypatch.setattr(settings, "TRUSTED_PROXIES", ["10.0.0.2"])

    # Client-supplied hops come first; the proxy appends the real peer last
    request = make_request("10.0.0.2", {"X-Forwarded-For": "1.2.3.4, 198.51.100.9"})
    assert get_client_ip(request) == "198.51.100.9"

    request = make_request("10.0.0.2", {"X-Real-IP": "198.51.100.10"})
    assert get_client_ip(request) == "198.51.100.10"

    request = make_request("10.0.0.2")
    assert get_client_ip(request) == "10.0.0.2"
