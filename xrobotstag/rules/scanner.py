from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from ..utils.logging import get_logger
from .directives import (
    DIRECTIVES,
    Directive,
    DirectiveKind,
    Value,
    is_directive_name,
    lookup_directive,
)


HEADER_RULE_IDENTIFIER = "x-robots-tag"
DEFAULT_SCOPE = ""

logger = get_logger(__name__)

_directive_token_re = re.compile(r"^[a-z][a-z0-9_\-]*\s*(:|$)", re.IGNORECASE)
_scope_token_re = re.compile(r"^[^\s:,]+$")


@dataclass
class ParsedHeaderLine:
    scope: str = DEFAULT_SCOPE
    directives: List[Tuple[Directive, str]] = field(default_factory=list)


@dataclass(frozen=True)
class ScannedRule:
    scope: str
    directive: Directive
    value: Value


def split_header(line: str) -> Optional[str]:
    """Return the header value if ``line`` is an X-Robots-Tag header."""
    name, sep, value = line.partition(":")
    if not sep or name.strip().lower() != HEADER_RULE_IDENTIFIER:
        return None
    return value.strip()


def _split_scope(first: str) -> Tuple[str, str]:
    left, sep, right = first.partition(":")
    left = left.strip()
    if sep and left and _scope_token_re.match(left) and not is_directive_name(left):
        return left.lower(), right.strip()
    return DEFAULT_SCOPE, first


def _join_continuations(fragments: List[str]) -> List[str]:
    # Dates such as "Friday, 25 Jun 2010 15:00:00 PST" contain commas.
    out: List[str] = []
    open_valued = False
    for frag in fragments:
        if open_valued and out and not _directive_token_re.match(frag):
            out[-1] = f"{out[-1]}, {frag}"
            continue
        out.append(frag)
        spec = lookup_directive(frag.partition(":")[0])
        open_valued = spec is not None and spec.kind is DirectiveKind.VALUED
    return out


def scan_header_line(line: str) -> Optional[ParsedHeaderLine]:
    value = split_header(line)
    if value is None:
        return None
    fragments = [f.strip() for f in value.split(",")]
    fragments = [f for f in fragments if f]
    parsed = ParsedHeaderLine()
    if not fragments:
        return parsed
    parsed.scope, fragments[0] = _split_scope(fragments[0])
    for frag in _join_continuations([f for f in fragments if f]):
        name = frag.partition(":")[0].strip()
        spec = lookup_directive(name)
        if spec is None:
            logger.debug(f"Skipping unknown directive {name!r}")
            continue
        parsed.directives.append((spec.directive, frag))
    return parsed


def scan_headers(lines: Iterable[str]) -> Iterator[ScannedRule]:
    for line in lines:
        parsed = scan_header_line(line)
        if parsed is None:
            continue
        for directive, frag in parsed.directives:
            yield ScannedRule(parsed.scope, directive, DIRECTIVES[directive].parse(frag))
