from .directives import (
    DIRECTIVES,
    Directive,
    DirectiveKind,
    DirectiveSpec,
    UnknownDirectiveError,
    UnparsedValue,
    get_directive_meaning,
    lookup_directive,
    parse_value,
)
from .rebuild import rebuild
from .scanner import DEFAULT_SCOPE, HEADER_RULE_IDENTIFIER, scan_header_line, scan_headers
from .useragent import resolve_scope
