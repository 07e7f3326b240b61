from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from .fetchers import http_fetcher
from .rules.aggregate import RawRuleSet, RuleAggregator
from .rules.directives import Value, get_directive_meaning
from .rules.rebuild import rebuild
from .rules.scanner import DEFAULT_SCOPE, scan_headers
from .rules.useragent import resolve_scope
from .utils.logging import get_logger
from .utils.url import encode_url, is_valid_url


logger = get_logger(__name__)


class XRobotsTagParser:
    """X-Robots-Tag rules as they apply to one user agent.

    Headers are scanned once, on construction. ``now`` is the reference time
    used when normalizing ``unavailable_after`` and defaults to the time of
    construction, so repeated :meth:`get_rules` calls agree with each other.
    """

    def __init__(
        self,
        headers: Optional[Iterable[str]] = None,
        user_agent: Optional[str] = DEFAULT_SCOPE,
        url: Optional[str] = None,
        now: Optional[datetime] = None,
    ):
        self.url: Optional[str] = None
        if url is not None:
            if not is_valid_url(url.strip()):
                logger.warning(f"Invalid URL: {url}")
            self.url = encode_url(url)
        if now is not None and now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        self.now = now or datetime.now(timezone.utc)
        self._aggregator = RuleAggregator().extend(scan_headers(list(headers or [])))
        self._user_agent = resolve_scope(self._aggregator.scopes(), user_agent, DEFAULT_SCOPE)
        logger.debug(f"Scopes {self._aggregator.scopes()} resolved to {self._user_agent!r}")

    @classmethod
    def from_url(
        cls,
        url: str,
        user_agent: Optional[str] = DEFAULT_SCOPE,
        timeout: float = 40.0,
        retries: int = 1,
        request_headers: Optional[Iterable[str]] = None,
    ) -> "XRobotsTagParser":
        lines = http_fetcher.fetch_header_lines(encode_url(url), timeout=timeout, headers=request_headers, retries=retries)
        return cls(lines, user_agent=user_agent, url=url)

    @property
    def user_agent(self) -> str:
        """The matched scope, or the default scope if none matched."""
        return self._user_agent

    def get_rules(self, raw: bool = False) -> Dict[str, Value]:
        rules: Dict[str, Value] = {}
        all_rules = self._aggregator.rules
        rules.update(all_rules.get(DEFAULT_SCOPE, {}))
        if self._user_agent != DEFAULT_SCOPE:
            rules.update(all_rules.get(self._user_agent, {}))
        if not raw:
            rules = rebuild(rules, self.now)
        return rules

    def export(self) -> RawRuleSet:
        return self._aggregator.snapshot()

    @staticmethod
    def get_directive_meaning(directive) -> str:
        return get_directive_meaning(directive)


def parse(headers: Iterable[str], user_agent: Optional[str] = DEFAULT_SCOPE) -> XRobotsTagParser:
    return XRobotsTagParser(headers, user_agent=user_agent)
