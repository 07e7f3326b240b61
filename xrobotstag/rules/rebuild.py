from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .directives import Directive, Value


ALL = Directive.ALL.value
NONE = Directive.NONE.value
NO_INDEX = Directive.NO_INDEX.value
UNAVAILABLE_AFTER = Directive.UNAVAILABLE_AFTER.value

# Umbrella directive -> the directives it stands for. The umbrella key itself
# is replaced by its members.
UMBRELLAS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        NONE: (NO_INDEX, Directive.NO_FOLLOW.value),
    }
)

# Directives implied once a dated directive has expired.
EXPIRY_IMPLIES: Tuple[str, ...] = (NO_INDEX,)


def expand_umbrellas(rules: Dict[str, Value]) -> None:
    for umbrella, members in UMBRELLAS.items():
        if rules.pop(umbrella, None):
            for member in members:
                rules[member] = True


def apply_expiry(rules: Dict[str, Value], now: Optional[datetime]) -> None:
    when = rules.get(UNAVAILABLE_AFTER)
    if now is None or not isinstance(when, datetime):
        return
    if when <= now:
        for member in EXPIRY_IMPLIES:
            rules[member] = True


def resolve_all(rules: Dict[str, Value]) -> None:
    # "all" is the unrestricted default; any other directive overrides it.
    if ALL in rules and len(rules) > 1:
        del rules[ALL]


def rebuild(rules: Mapping[str, Value], now: Optional[datetime] = None) -> Dict[str, Value]:
    """Reconcile a merged directive map into the effective rule set.

    ``now`` is the reference time for ``unavailable_after``; it must be
    timezone-aware. Without it dates are never treated as expired. The input
    mapping is left untouched.
    """
    result: Dict[str, Value] = dict(rules)
    expand_umbrellas(result)
    apply_expiry(result, now)
    resolve_all(result)
    return result
