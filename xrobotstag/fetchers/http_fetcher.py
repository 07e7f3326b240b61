from __future__ import annotations

import httpx
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": "xrobotstag/0.1 (+https://github.com/xrobotstag/xrobotstag)",
    "Accept": "*/*",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
}


@dataclass
class HeaderResult:
    url: str
    status_code: int
    lines: List[str]


def build_headers(extra_headers: Optional[Iterable[str]] = None) -> Dict[str, str]:
    headers = dict(DEFAULT_HEADERS)
    if extra_headers:
        for kv in extra_headers:
            if "=" in kv:
                k, v = kv.split("=", 1)
                headers[k.strip()] = v.strip()
    return headers


def header_lines(resp: httpx.Response) -> List[str]:
    """Flatten a response into a status line and one line per header.

    Repeated headers stay separate lines, in the order they were received.
    """
    lines = [f"{resp.http_version} {resp.status_code} {resp.reason_phrase}".rstrip()]
    for name, value in resp.headers.multi_items():
        lines.append(f"{name}: {value}")
    return lines


def fetch(url: str, timeout: float = 40.0, headers: Optional[Iterable[str]] = None, retries: int = 1) -> HeaderResult:
    hdrs = build_headers(headers)
    last_exc: Optional[Exception] = None
    for attempt in range(retries + 1):
        try:
            with httpx.Client(http2=True, timeout=timeout, follow_redirects=True, headers=hdrs) as client:
                resp = client.get(url)
                return HeaderResult(url=str(resp.url), status_code=resp.status_code, lines=header_lines(resp))
        except httpx.TransportError as e:
            last_exc = e
            logger.debug(f"Header fetch attempt {attempt + 1} failed: {e}")
            if attempt >= retries:
                raise
            continue
    # Should not reach here
    assert last_exc
    raise last_exc


def fetch_header_lines(url: str, timeout: float = 40.0, headers: Optional[Iterable[str]] = None, retries: int = 1) -> List[str]:
    return fetch(url, timeout=timeout, headers=headers, retries=retries).lines
