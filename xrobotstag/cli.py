from __future__ import annotations

from pathlib import Path
from typing import Optional, List

import typer

from .version import __version__
from .utils.logging import setup_logger
from .pipeline import RunConfig, run


app = typer.Typer(add_completion=False, help="Parse X-Robots-Tag HTTP headers into effective crawler directives.")


@app.command()
def main(
    page: Optional[str] = typer.Option(None, "-p", "--page", help="URL whose response headers to parse"),
    user_agent: Optional[str] = typer.Option(None, "-u", "--user-agent", help="Crawler user agent to resolve rules for"),
    header: List[str] = typer.Option(None, "--header", help="Raw header line, e.g. 'X-Robots-Tag: noindex'; skips the fetch", show_default=False),
    request_header: List[str] = typer.Option(None, "--request-header", help="Extra HTTP request header KEY=VALUE", show_default=False),
    raw: bool = typer.Option(False, "--raw/--normalized", help="Show merged rules without normalization"),
    export: bool = typer.Option(False, "--export", help="Show the rules of every user agent scope"),
    meaning: Optional[str] = typer.Option(None, "--meaning", help="Describe a directive and exit"),
    timeout: float = typer.Option(40.0, "--timeout", help="Timeout seconds"),
    retry: int = typer.Option(1, "--retry", help="Retries for transient errors"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write the JSON result to this file"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    version: bool = typer.Option(False, "--version", help="Print version and exit"),
):
    # Load environment variables from .env if present (best-effort)
    try:
        from dotenv import load_dotenv  # type: ignore

        load_dotenv()
    except Exception:
        pass
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    setup_logger(log_level)
    cfg = RunConfig(
        page=page,
        user_agent=user_agent,
        headers=header,
        request_headers=request_header,
        raw=raw,
        export=export,
        meaning=meaning,
        timeout=timeout,
        retries=retry,
        output=output,
        log_level=log_level,
    )
    result = run(cfg)
    if output is None:
        typer.echo(result)


def entrypoint():
    app()

if __name__ == "__main__":
    entrypoint()
