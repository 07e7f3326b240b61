from __future__ import annotations

from typing import Iterable, Optional

from .scanner import DEFAULT_SCOPE


def resolve_scope(scopes: Iterable[str], user_agent: Optional[str], default: str = DEFAULT_SCOPE) -> str:
    """Pick the scope that applies to ``user_agent`` on top of the default scope.

    Matching is case-insensitive and ranked:

    1. a scope equal to the user agent;
    2. the longest scope contained in the user agent, so
       ``Mozilla/5.0 (compatible; Googlebot/2.1)`` matches ``googlebot``;
    3. only when neither matched, the longest scope that contains the user
       agent, so a bare ``googlebot`` still matches ``googlebot-news``.

    Ties keep the first scope seen. Without a match, or without a user agent,
    the default scope is returned.
    """
    ua = (user_agent or "").strip().lower()
    if not ua:
        return default
    inside = around = default
    inside_len = around_len = 0
    for scope in scopes:
        if scope == default or not scope:
            continue
        token = scope.lower()
        if token == ua:
            return scope
        if token in ua:
            if len(token) > inside_len:
                inside, inside_len = scope, len(token)
        elif ua in token and len(token) > around_len:
            around, around_len = scope, len(token)
    if inside_len:
        return inside
    return around
