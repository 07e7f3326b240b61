from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import httpx

from .parser import XRobotsTagParser
from .rules.directives import UnknownDirectiveError, UnparsedValue, Value, get_directive_meaning
from .utils.io import dump_json, write_text_file
from .utils.logging import get_logger
from .utils.url import normalize_url


USER_AGENT_ENV = "XROBOTSTAG_USER_AGENT"


@dataclass
class RunConfig:
    page: Optional[str] = None
    user_agent: Optional[str] = None  # None=from XROBOTSTAG_USER_AGENT, else default scope
    headers: Optional[Iterable[str]] = None  # raw header lines; skips the fetch
    request_headers: Optional[Iterable[str]] = None
    raw: bool = False
    export: bool = False
    meaning: Optional[str] = None
    timeout: float = 40.0
    retries: int = 1
    output: Optional[Path] = None
    log_level: str = "WARNING"


def _resolve_user_agent(cfg: RunConfig) -> str:
    if cfg.user_agent is not None:
        return cfg.user_agent
    return os.getenv(USER_AGENT_ENV, "")


def to_jsonable(value: Value) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UnparsedValue):
        return value.raw
    return value


def render_rules(rules: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in rules.items():
        if isinstance(value, dict):
            out[key] = render_rules(value)
        else:
            out[key] = to_jsonable(value)
    return out


def build_parser(cfg: RunConfig, logger) -> XRobotsTagParser:
    user_agent = _resolve_user_agent(cfg)
    headers = list(cfg.headers or [])
    if headers:
        logger.debug(f"Using {len(headers)} supplied header line(s)")
        return XRobotsTagParser(headers, user_agent=user_agent, url=cfg.page)
    if not cfg.page:
        logger.error("Nothing to parse: pass --page or at least one --header.")
        raise SystemExit(1)
    try:
        return XRobotsTagParser.from_url(
            normalize_url(cfg.page),
            user_agent=user_agent,
            timeout=cfg.timeout,
            retries=cfg.retries,
            request_headers=cfg.request_headers,
        )
    except httpx.HTTPError as e:
        logger.error(f"Unable to fetch HTTP headers: {e}")
        raise SystemExit(1)


def run(cfg: RunConfig) -> str:
    logger = get_logger()

    if cfg.meaning:
        try:
            text = get_directive_meaning(cfg.meaning)
        except UnknownDirectiveError as e:
            logger.error(str(e))
            raise SystemExit(2)
        return _emit(cfg, text, logger)

    parser = build_parser(cfg, logger)
    if cfg.page:
        logger.info(f"Source: {parser.url}")
    logger.info(f"User-agent scope: {parser.user_agent or '(default)'}")

    if cfg.export:
        data = parser.export()
    else:
        data = parser.get_rules(raw=cfg.raw)
    text = dump_json(render_rules(data))
    return _emit(cfg, text, logger)


def _emit(cfg: RunConfig, text: str, logger) -> str:
    if cfg.output:
        written = write_text_file(cfg.output, text + "\n")
        logger.info(f"Saved: {written.path} ({written.bytes_written} bytes)")
    return text
