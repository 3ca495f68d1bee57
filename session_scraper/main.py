#!/usr/bin/env python3
"""
Session Scraper

Logs into a site through its HTML login form and fetches pages with the
resulting session, relogging in periodically to keep it alive.

Usage:
    session-scraper login -f username=me -f password=secret
    session-scraper fetch --login -f username=me -f password=secret /page.php
"""

import sys
from typing import Dict, List, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from .config import config
from .target import TargetServer
from .utils.exceptions import ReloginError, ScraperException
from .utils.logging_config import setup_logging, get_logger

console = Console()


def setup_environment():
    """Initialize logging."""
    setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        stream=config.log_stream,
        console_format=config.log_format,
    )
    return get_logger()


def parse_pairs(pairs: Tuple[str, ...]) -> Dict[str, List[str]]:
    """Turn ``name=value`` strings into a form mapping, repeated names kept."""
    values: Dict[str, List[str]] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {pair!r}")
        values.setdefault(name, []).append(value)
    return values


def build_target(
    host: Optional[str],
    agent: Optional[str],
    session_cookie: Optional[str],
    connections_per_login: Optional[int],
) -> TargetServer:
    """Create a target server from config with command line overrides."""
    overrides = {}
    if host:
        overrides["host"] = host
    if agent:
        overrides["agent_name"] = agent
    if session_cookie:
        overrides["session_cookie_name"] = session_cookie
    if connections_per_login is not None:
        overrides["connections_per_login"] = connections_per_login

    target = TargetServer.from_config(config, **overrides)
    if not target.host:
        target.close()
        raise click.UsageError("No host given. Use --host or set SCRAPER_HOST.")
    return target


def target_options(func):
    """Options shared by commands that talk to a target server."""
    func = click.option("--connections-per-login", type=click.IntRange(min=0),
                        default=None, help="Fetches between relogins (0 = never)")(func)
    func = click.option("--session-cookie", default=None,
                        help="Prefix of the session cookie expected after login")(func)
    func = click.option("--agent", default=None, help="User-Agent to send")(func)
    func = click.option("--host", default=None, help="Base URL of the target server")(func)
    return func


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """Session-aware HTTP scraper with form login."""
    pass


@cli.command()
@target_options
@click.option("--login-path", default=None, help="Path the login form posts to")
@click.option("--field", "-f", "fields", multiple=True, help="Login form field as name=value")
def login(host, agent, session_cookie, connections_per_login, login_path, fields):
    """Log in and show the session cookies received."""
    logger = setup_environment()

    form = parse_pairs(fields)
    path = login_path or config.target.login_path
    if not path:
        raise click.UsageError("No login path given. Use --login-path or set SCRAPER_LOGIN_PATH.")

    with build_target(host, agent, session_cookie, connections_per_login) as target:
        try:
            console.print(f"\n[bold blue]Logging in to {target.url(path)}[/bold blue]\n")
            target.login(path, form)
        except ScraperException as e:
            console.print(f"[bold red]Login failed:[/bold red] {e}")
            sys.exit(1)

        table = Table()
        table.add_column("Cookie", style="cyan")
        table.add_column("Domain", style="green")
        table.add_column("Path", style="green")
        for token in target.jar:
            table.add_row(token.name, token.domain or "(host)", token.path)

        console.print("[bold green]Login successful![/bold green]")
        console.print(table)


@cli.command()
@target_options
@click.argument("paths", nargs=-1, required=True)
@click.option("--login/--no-login", "do_login", default=False, help="Log in before fetching")
@click.option("--login-path", default=None, help="Path the login form posts to")
@click.option("--field", "-f", "fields", multiple=True, help="Login form field as name=value")
@click.option("--param", "-p", "params", multiple=True, help="Query parameter as name=value")
@click.option("--show-body", is_flag=True, help="Print each page body")
def fetch(host, agent, session_cookie, connections_per_login, paths, do_login,
          login_path, fields, params, show_body):
    """Fetch one or more pages using the session."""
    logger = setup_environment()

    query = parse_pairs(params)

    with build_target(host, agent, session_cookie, connections_per_login) as target:
        if do_login:
            path = login_path or config.target.login_path
            if not path:
                raise click.UsageError("No login path given. Use --login-path or set SCRAPER_LOGIN_PATH.")
            try:
                target.login(path, parse_pairs(fields))
            except ScraperException as e:
                console.print(f"[bold red]Login failed:[/bold red] {e}")
                sys.exit(1)

        table = Table()
        table.add_column("Path", style="cyan")
        table.add_column("Status", style="green")
        table.add_column("Length", style="green")

        failed = 0
        for path in paths:
            try:
                result = target.fetch(path, query)
            except ReloginError as e:
                result = e.result
            except ScraperException as e:
                logger.error(f"Failed to fetch {path}: {e}")
                table.add_row(path, "[red]error[/red]", "-")
                failed += 1
                if e.relogin_error is not None:
                    console.print(f"[yellow]Relogin failed:[/yellow] {e.relogin_error}")
                continue

            table.add_row(path, str(result.status_code), str(len(result.text)))
            if not result.ok:
                console.print(f"[yellow]Relogin failed:[/yellow] {result.relogin_error}")
            if show_body:
                console.print(result.text, markup=False, highlight=False)

        console.print(table)
        console.print(f"Connections made: {target.num_connections}")

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
