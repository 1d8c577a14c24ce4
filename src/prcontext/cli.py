from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from .client import GitHubClient
from .commands import complete_open_pull_requests, run_command
from .config import environ_lookup
from .errors import PrContextError
from .formatters import FORMATS, get_formatter

_stderr = Console(stderr=True)


load_dotenv()


def _document_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option(
        "--output",
        "output_path",
        type=click.Path(path_type=Path),
        default=None,
        help="Write output to a file instead of stdout.",
    )(func)
    func = click.option(
        "--byte-offsets",
        is_flag=True,
        default=False,
        help="Report JSON section ranges in UTF-8 bytes instead of code points.",
    )(func)
    func = click.option(
        "--format",
        "output_format",
        type=click.Choice(FORMATS),
        default="text",
        show_default=True,
        help="Output format.",
    )(func)
    return func


def _render(
    command: str,
    args: list[str],
    output_format: str,
    output_path: Path | None,
    byte_offsets: bool,
    cwd: Path | None = None,
) -> None:
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=_stderr,
            transient=True,
        ) as progress:
            progress.add_task("Fetching pull request…", total=None)
            with GitHubClient(environ_lookup) as client:
                document = run_command(command, args, client, cwd)
    except PrContextError as exc:
        _stderr.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    output = get_formatter(output_format, byte_offsets=byte_offsets)(document)

    if output_path is not None:
        output_path.write_text(output, encoding="utf-8")
        _stderr.print(f"[green]Wrote {len(document.sections)} sections to {output_path}[/green]")
    else:
        click.echo(output)


@click.group()
def cli() -> None:
    """prcontext: turn a GitHub pull request and its review comments into one annotated document."""


@cli.command()
@click.argument("url")
@_document_options
def link(url: str, output_format: str, byte_offsets: bool, output_path: Path | None) -> None:
    """Assemble the pull request at URL."""
    _render("pr-link", [url], output_format, output_path, byte_offsets)


@cli.command(name="open")
@click.argument("identity", metavar="OWNER,REPO,NUMBER")
@_document_options
def open_(identity: str, output_format: str, byte_offsets: bool, output_path: Path | None) -> None:
    """Assemble pull request NUMBER of OWNER/REPO."""
    _render("pr-open", [identity], output_format, output_path, byte_offsets)


@cli.command()
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Git checkout whose current branch has an open pull request.",
)
@_document_options
def current(cwd: Path, output_format: str, byte_offsets: bool, output_path: Path | None) -> None:
    """Assemble the open pull request for the checked-out branch."""
    _render("pr-current", [], output_format, output_path, byte_offsets, cwd=cwd)


@cli.command(name="list")
@click.argument("repo", metavar="OWNER/REPO")
@click.option("--branch", default=None, help="Only pull requests whose head branch matches.")
def list_(repo: str, branch: str | None) -> None:
    """List open pull requests of OWNER/REPO."""
    if repo.count("/") != 1:
        raise click.BadParameter(f"{repo!r} is not a valid OWNER/REPO format.", param_hint="REPO")
    owner, repo_name = repo.split("/", 1)
    if not owner or not repo_name:
        raise click.BadParameter(f"{repo!r} is not a valid OWNER/REPO format.", param_hint="REPO")

    try:
        with GitHubClient(environ_lookup) as client:
            completions = complete_open_pull_requests(client, owner, repo_name, branch)
    except PrContextError as exc:
        _stderr.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    if not completions:
        _stderr.print(f"No open pull requests in {repo}.")
        return
    click.echo("\n".join(f"{c.label}\t{c.new_text}" for c in completions))
