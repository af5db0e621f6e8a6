"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- Token generation (cryptographic)
- HTTP request helpers (client IP extraction)

These utilities are pure infrastructure - they have no knowledge
of domain concepts like users or participation.

Usage:
    from core.helpers import friendly_token, get_client_ip

    password = friendly_token(20)
    ip = get_client_ip(request)
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from django.http import HttpRequest


def friendly_token(length: int = 20) -> str:
    """
    Generate a URL-safe random token of exactly `length` characters.

    Used for throwaway passwords on accounts created from an external
    identity provider. Ambiguous characters (l, I, O, 0) are replaced.

    Example:
        friendly_token(20)  # "x3mZqv9s-ePf_T1aB7wN"
    """
    token = secrets.token_urlsafe(length)[:length]
    return token.translate(str.maketrans("lIO0", "sxyz"))


def get_client_ip(request: HttpRequest) -> str:
    """
    Extract client IP from request, handling proxies.

    Checks X-Forwarded-For header for proxy chains.

    Args:
        request: Django HTTP request

    Returns:
        Client IP address string
    """
    x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        # Take the first IP in the chain (original client)
        ip = x_forwarded_for.split(",")[0].strip()
    else:
        ip = request.META.get("REMOTE_ADDR", "")
    return ip
