# pagewait/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
Print the effective configuration, or open a page and wait for a condition
on it (handy for checking selectors and timeouts before scripting them).
"""

import json
import sys
from datetime import datetime, timezone
from typing import Optional

import click

from pagewait.core.errors import WaitTimeoutError
from pagewait.core.page_objects import WebsiteWrapper
from pagewait.drivers import factory
from pagewait.drivers.interface import Locator
from pagewait.utils.config import BrowserEngine, get_settings
from pagewait.utils.logger import bind, get_logger, set_log_level, unbind


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False))


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.version_option(package_name="pagewait")
def cli(log_level: Optional[str]):
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    _echo_json(get_settings().model_dump(mode="json"))


@cli.command("probe")
@click.argument("url")
@click.option("--exists", "exists_css", default=None, help="Wait until this CSS selector matches")
@click.option("--visible", "visible_css", default=None, help="Wait until the first match of this CSS selector is displayed")
@click.option("--gone", "gone_css", default=None, help="Wait until this CSS selector matches nothing")
@click.option("--url-prefix", default=None, help="Wait until the page URL starts with this prefix")
@click.option("--timeout-ms", type=int, default=None, help="Override DEFAULT_TIMEOUT_MS for this wait")
@click.option(
    "--engine",
    type=click.Choice([e.value for e in BrowserEngine]),
    default=None,
    help="Override BROWSER_ENGINE from settings",
)
def cmd_probe(
    url: str,
    exists_css: Optional[str],
    visible_css: Optional[str],
    gone_css: Optional[str],
    url_prefix: Optional[str],
    timeout_ms: Optional[int],
    engine: Optional[str],
):
    """
    Open URL and wait for one condition.

    Examples:
      pagewait probe https://example.com --exists "h1"
      pagewait probe https://example.com/login --url-prefix https://example.com/home --timeout-ms 5000
    """
    chosen = [c for c in (exists_css, visible_css, gone_css, url_prefix) if c is not None]
    if len(chosen) != 1:
        click.echo("Provide exactly one of --exists, --visible, --gone or --url-prefix.")
        sys.exit(2)

    log = get_logger(__name__)
    bind(probe_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"))
    code = 0
    try:
        with WebsiteWrapper(factory.open_session(get_settings(), engine=engine)) as site:
            site.driver.get(url)
            wait = site.wait_until
            try:
                if exists_css is not None:
                    wait.element_exists(Locator.css(exists_css), timeout_ms=timeout_ms)
                    detail = f"found {exists_css}"
                elif visible_css is not None:
                    wait.element_is_visible(Locator.css(visible_css), timeout_ms=timeout_ms)
                    detail = f"visible {visible_css}"
                elif gone_css is not None:
                    wait.no_elements_exist(Locator.css(gone_css), timeout_ms=timeout_ms)
                    detail = f"gone {gone_css}"
                else:
                    detail = f"url {wait.url_starts_with(url_prefix, timeout_ms=timeout_ms)}"
            except WaitTimeoutError as e:
                log.debug(f"Probe of {url} timed out")
                click.echo(f"ERR {url} -> {e}")
                code = 1
            else:
                click.echo(f"OK  {url} -> {detail}")
    finally:
        unbind("probe_id")
    sys.exit(code)


def main() -> None:
    cli(prog_name="pagewait")


if __name__ == "__main__":
    main()
