from datetime import datetime

from xrobotstag.rules.directives import Directive, UnparsedValue
from xrobotstag.rules.scanner import DEFAULT_SCOPE, scan_header_line, scan_headers


def test_other_headers_are_ignored():
    assert scan_header_line("HTTP/1.1 200 OK") is None
    assert scan_header_line("Date: Tue, 25 May 2010 21:42:43 GMT") is None
    assert scan_header_line("X-Robots: noindex") is None


def test_header_name_is_case_insensitive():
    parsed = scan_header_line("x-ROBOTS-tag:noindex,NOFOLLOW")
    assert parsed.scope == DEFAULT_SCOPE
    assert [d for d, _ in parsed.directives] == [Directive.NO_INDEX, Directive.NO_FOLLOW]


def test_scope_prefix_applies_to_whole_line():
    parsed = scan_header_line("X-Robots-Tag: Googlebot: noindex, noarchive")
    assert parsed.scope == "googlebot"
    assert [d for d, _ in parsed.directives] == [Directive.NO_INDEX, Directive.NO_ARCHIVE]


def test_directive_name_is_not_taken_for_scope():
    parsed = scan_header_line("X-Robots-Tag: unavailable_after: 25 Jun 2010 15:00:00 PST")
    assert parsed.scope == DEFAULT_SCOPE
    assert parsed.directives == [(Directive.UNAVAILABLE_AFTER, "unavailable_after: 25 Jun 2010 15:00:00 PST")]


def test_unmodeled_directive_is_not_taken_for_scope():
    parsed = scan_header_line("X-Robots-Tag: max-snippet: 20, noindex")
    assert parsed.scope == DEFAULT_SCOPE
    assert [d for d, _ in parsed.directives] == [Directive.NO_INDEX]


def test_date_with_commas_is_rejoined():
    parsed = scan_header_line(
        "X-Robots-Tag: googlebot: unavailable_after: Friday, 25 Jun 2010 15:00:00 PST, noindex"
    )
    assert parsed.scope == "googlebot"
    assert parsed.directives == [
        (Directive.UNAVAILABLE_AFTER, "unavailable_after: Friday, 25 Jun 2010 15:00:00 PST"),
        (Directive.NO_INDEX, "noindex"),
    ]


def test_unknown_directives_are_skipped():
    parsed = scan_header_line("X-Robots-Tag: noai, bogus, nosnippet")
    assert [d for d, _ in parsed.directives] == [Directive.NO_SNIPPET]


def test_line_without_directives():
    assert scan_header_line("X-Robots-Tag:").directives == []
    assert scan_header_line("X-Robots-Tag: bingbot:").directives == []
    assert scan_header_line("X-Robots-Tag: , ,").directives == []


def test_scan_headers_parses_values():
    rules = list(
        scan_headers(
            [
                "HTTP/1.1 200 OK",
                "X-Robots-Tag: noodp",
                "X-Robots-Tag: bingbot: unavailable_after: not a date",
                "X-Robots-Tag: unavailable_after: Friday, 25 Jun 2010 15:00:00 PST",
            ]
        )
    )
    assert [(r.scope, r.directive) for r in rules] == [
        ("", Directive.NO_ODP),
        ("bingbot", Directive.UNAVAILABLE_AFTER),
        ("", Directive.UNAVAILABLE_AFTER),
    ]
    assert rules[0].value is True
    assert rules[1].value == UnparsedValue("not a date")
    assert isinstance(rules[2].value, datetime)
