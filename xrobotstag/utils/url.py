from __future__ import annotations

from urllib.parse import quote, urlparse, urlunparse


_SCHEMES = ("http", "https")

# Characters left untouched when re-encoding path, query and fragment.
_SAFE_PATH = "/%:@!$&'()*+,;=-._~"
_SAFE_QUERY = _SAFE_PATH + "?"


def normalize_url(url: str) -> str:
    parsed = urlparse(url.strip())
    scheme = (parsed.scheme or "http").lower()
    netloc = parsed.netloc.lower()
    path = parsed.path or "/"
    if not parsed.netloc and parsed.path and not parsed.scheme:
        # "example.com/page" parses as a bare path
        host, _, rest = parsed.path.partition("/")
        netloc = host.lower()
        path = "/" + rest
    return urlunparse((scheme, netloc, path, "", parsed.query, parsed.fragment))


def encode_url(url: str) -> str:
    parsed = urlparse(normalize_url(url))
    try:
        host = parsed.hostname.encode("idna").decode("ascii") if parsed.hostname else ""
    except UnicodeError:
        host = parsed.hostname or ""
    netloc = host
    try:
        port = parsed.port
    except ValueError:
        port = None
    if port:
        netloc = f"{host}:{port}"
    if parsed.username:
        netloc = f"{parsed.username}@{netloc}"
    return urlunparse(
        (
            parsed.scheme,
            netloc,
            quote(parsed.path, safe=_SAFE_PATH),
            "",
            quote(parsed.query, safe=_SAFE_QUERY),
            quote(parsed.fragment, safe=_SAFE_QUERY),
        )
    )


def is_valid_url(url: str) -> bool:
    if not url or any(ch.isspace() for ch in url.strip()):
        return False
    parsed = urlparse(url.strip())
    if parsed.scheme.lower() not in _SCHEMES or not parsed.netloc:
        return False
    try:
        port = parsed.port
    except ValueError:
        return False
    host = parsed.hostname or ""
    if not host or host.startswith(".") or host.endswith("..") or ".." in host:
        return False
    return port is None or 0 < port < 65536
