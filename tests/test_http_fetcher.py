import httpx
import pytest

from xrobotstag.fetchers import http_fetcher
from xrobotstag.fetchers.http_fetcher import build_headers, header_lines
from xrobotstag.pipeline import RunConfig, run
from xrobotstag.parser import XRobotsTagParser


def test_header_lines_keep_repeated_headers():
    resp = httpx.Response(
        200,
        headers=[
            ("Content-Type", "text/html"),
            ("X-Robots-Tag", "googlebot: nofollow"),
            ("X-Robots-Tag", "noarchive"),
        ],
    )
    lines = header_lines(resp)
    assert lines[0] == "HTTP/1.1 200 OK"
    assert [l.lower() for l in lines[1:]] == [
        "content-type: text/html",
        "x-robots-tag: googlebot: nofollow",
        "x-robots-tag: noarchive",
    ]


def test_header_lines_feed_the_parser():
    resp = httpx.Response(404, headers=[("X-Robots-Tag", "noindex"), ("X-Robots-Tag", "googlebot: noodp")])
    parser = XRobotsTagParser(header_lines(resp), "Googlebot/2.1")
    assert parser.get_rules() == {"noindex": True, "noodp": True}


def test_build_headers_merges_extra():
    hdrs = build_headers(["User-Agent=mybot/1.0", "X-Debug = 1", "ignored"])
    assert hdrs["User-Agent"] == "mybot/1.0"
    assert hdrs["X-Debug"] == "1"
    assert "ignored" not in hdrs


def test_from_url_uses_fetched_lines(monkeypatch):
    calls = []

    def fake_fetch(url, timeout=40.0, headers=None, retries=1):
        calls.append(url)
        return ["HTTP/1.1 200 OK", "x-robots-tag: bingbot: nosnippet"]

    monkeypatch.setattr(http_fetcher, "fetch_header_lines", fake_fetch)
    parser = XRobotsTagParser.from_url("http://example.com/a b", "bingbot")
    assert calls == ["http://example.com/a%20b"]
    assert parser.url == "http://example.com/a%20b"
    assert parser.get_rules() == {"nosnippet": True}


def test_fetch_failure_exits(monkeypatch):
    def failing_fetch(url, timeout=40.0, headers=None, retries=1):
        raise httpx.ConnectError("refused")

    monkeypatch.setattr(http_fetcher, "fetch_header_lines", failing_fetch)
    with pytest.raises(SystemExit) as exc:
        run(RunConfig(page="http://example.com/"))
    assert exc.value.code == 1
