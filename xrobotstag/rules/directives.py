from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Union

from ..utils.logging import get_logger


logger = get_logger(__name__)


class Directive(Enum):
    ALL = "all"
    NONE = "none"
    NO_ARCHIVE = "noarchive"
    NO_FOLLOW = "nofollow"
    NO_IMAGE_INDEX = "noimageindex"
    NO_INDEX = "noindex"
    NO_ODP = "noodp"
    NO_SNIPPET = "nosnippet"
    NO_TRANSLATE = "notranslate"
    UNAVAILABLE_AFTER = "unavailable_after"


class DirectiveKind(Enum):
    FLAG = "flag"
    VALUED = "valued"


class UnknownDirectiveError(ValueError):
    def __init__(self, name: str):
        super().__init__(f"Unknown directive: {name!r}")
        self.name = name


@dataclass(frozen=True)
class UnparsedValue:
    """Value of a valued directive whose text could not be parsed.

    Truthy, so the directive still counts as present.
    """

    raw: str

    def __str__(self) -> str:
        return self.raw


Value = Union[bool, datetime, UnparsedValue]


@dataclass(frozen=True)
class DirectiveSpec:
    directive: Directive
    kind: DirectiveKind
    parse: Callable[[str], Value]
    meaning: str


def fragment_value(fragment: str) -> str:
    """Text after the first colon of a directive fragment, trimmed."""
    _, sep, rest = fragment.partition(":")
    return rest.strip() if sep else ""


def parse_flag(fragment: str) -> Value:
    return True


def parse_date(fragment: str) -> Value:
    text = fragment_value(fragment)
    dt = _parse_datetime(text)
    if dt is None:
        logger.debug(f"Unparsable date {text!r}, keeping raw value")
        return UnparsedValue(text)
    return dt


def _parse_datetime(text: str) -> Optional[datetime]:
    if not text:
        return None
    dt: Optional[datetime] = None
    try:
        dt = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        dt = None
    if dt is None:
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


DIRECTIVES: Mapping[Directive, DirectiveSpec] = MappingProxyType(
    {
        spec.directive: spec
        for spec in (
            DirectiveSpec(
                Directive.ALL,
                DirectiveKind.FLAG,
                parse_flag,
                "There are no restrictions for indexing or serving. "
                "This is the default value and has no effect if explicitly listed.",
            ),
            DirectiveSpec(
                Directive.NONE,
                DirectiveKind.FLAG,
                parse_flag,
                "Equivalent to noindex, nofollow.",
            ),
            DirectiveSpec(
                Directive.NO_ARCHIVE,
                DirectiveKind.FLAG,
                parse_flag,
                "Do not show a cached link in search results.",
            ),
            DirectiveSpec(
                Directive.NO_FOLLOW,
                DirectiveKind.FLAG,
                parse_flag,
                "Do not follow the links on this page.",
            ),
            DirectiveSpec(
                Directive.NO_IMAGE_INDEX,
                DirectiveKind.FLAG,
                parse_flag,
                "Do not index images on this page.",
            ),
            DirectiveSpec(
                Directive.NO_INDEX,
                DirectiveKind.FLAG,
                parse_flag,
                "Do not show this page in search results and do not show "
                "a cached link in search results.",
            ),
            DirectiveSpec(
                Directive.NO_ODP,
                DirectiveKind.FLAG,
                parse_flag,
                "Do not use metadata from the Open Directory project for "
                "titles or snippets shown for this page.",
            ),
            DirectiveSpec(
                Directive.NO_SNIPPET,
                DirectiveKind.FLAG,
                parse_flag,
                "Do not show a snippet in the search results for this page.",
            ),
            DirectiveSpec(
                Directive.NO_TRANSLATE,
                DirectiveKind.FLAG,
                parse_flag,
                "Do not offer translation of this page in search results.",
            ),
            DirectiveSpec(
                Directive.UNAVAILABLE_AFTER,
                DirectiveKind.VALUED,
                parse_date,
                "Do not show this page in search results after the specified date/time.",
            ),
        )
    }
)

_BY_NAME: Mapping[str, DirectiveSpec] = MappingProxyType(
    {d.value: spec for d, spec in DIRECTIVES.items()}
)

# Directive names in the wild that are not modeled here. They are skipped
# while scanning but never taken for a user-agent scope.
RESERVED_NAMES = frozenset(
    {
        "index",
        "follow",
        "nocache",
        "noai",
        "noimageai",
        "indexifembedded",
        "max-snippet",
        "max-image-preview",
        "max-video-preview",
    }
)


def lookup_directive(name: str) -> Optional[DirectiveSpec]:
    return _BY_NAME.get(name.strip().lower())


def is_directive_name(name: str) -> bool:
    key = name.strip().lower()
    return key in _BY_NAME or key in RESERVED_NAMES


def parse_value(directive: Union[Directive, str], fragment: str) -> Value:
    name = directive.value if isinstance(directive, Directive) else directive
    spec = lookup_directive(name)
    if spec is None:
        raise UnknownDirectiveError(name)
    return spec.parse(fragment)


def get_directive_meaning(directive: Union[Directive, str]) -> str:
    name = directive.value if isinstance(directive, Directive) else str(directive)
    spec = lookup_directive(name)
    if spec is None:
        raise UnknownDirectiveError(name)
    return spec.meaning
