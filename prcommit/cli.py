import asyncio
from collections.abc import Callable
from functools import wraps
from logging import getLogger
from pathlib import Path
from typing import Any

import typer

from .conf.settings import Settings
from .services.formatter import print_error, show_progress
from .services.github.auth import GitHubClient
from .services.github.pullrequests import PullRequestFetcher
from .services.mailmap import AliasTable, IdentityResolver
from .services.message import generate_commit_message
from .settings import settings

app = typer.Typer()
logger = getLogger(__name__)


def syncify(f: Callable[..., Any]) -> Callable[..., Any]:
    """This simple decorator converts an async function into a sync function,
    allowing it to work with Typer.
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper


@app.command(help=f"Display the current installed version of {settings.project_name}.")
def version() -> None:
    from . import __version__

    typer.echo(f"{settings.project_name} - {__version__}")


@app.command(name="message", help="Generate a squash commit message for a pull request.")
@syncify
async def message(
    number: int = typer.Argument(
        ...,
        min=1,
        help="Pull request number",
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        help="GitHub Personal Access Token (overrides env var)",
    ),
    owner: str | None = typer.Option(
        None,
        "--owner",
        help="Repository owner (overrides env var)",
    ),
    repo: str | None = typer.Option(
        None,
        "--repo",
        help="Repository name (overrides env var)",
    ),
    repo_root: Path | None = typer.Option(
        None,
        "--repo-root",
        help="Root of the repository checkout holding the .mailmap alias file",
    ),
    mailmap: Path | None = typer.Option(
        None,
        "--mailmap",
        help="Alias file to use instead of <repo-root>/.mailmap",
    ),
) -> None:
    """Generate a squash commit message for a pull request and print it to stdout."""
    try:
        run_settings = _resolve_settings(owner=owner, repo=repo, repo_root=repo_root, mailmap=mailmap)

        resolver = IdentityResolver(
            AliasTable.load(run_settings.get_mailmap_path()),
            noreply_host=run_settings.github_noreply_host,
        )

        github_client = GitHubClient(settings=run_settings, token_override=token).get_client()

        async with github_client:
            with show_progress(f"Fetching pull request #{number}..."):
                fetcher = PullRequestFetcher(github_client, run_settings.github_owner, run_settings.github_repo)
                metadata = await fetcher.fetch(number)

        commit_message = generate_commit_message(
            metadata,
            resolver,
            owner=run_settings.github_owner,
            repo=run_settings.github_repo,
        )

    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error while generating the commit message")
        print_error(str(e))
        raise typer.Exit(1)

    typer.echo(commit_message, nl=False)


def _resolve_settings(
    owner: str | None = None,
    repo: str | None = None,
    repo_root: Path | None = None,
    mailmap: Path | None = None,
) -> Settings:
    """Apply command line overrides on top of the global settings.

    Raises:
        ValueError: If an override fails validation
    """
    overrides: dict[str, Any] = {}
    if owner is not None:
        overrides["github_owner"] = owner
    if repo is not None:
        overrides["github_repo"] = repo
    if repo_root is not None:
        overrides["repo_root"] = repo_root
    if mailmap is not None:
        overrides["mailmap_path"] = mailmap

    if not overrides:
        return settings

    # Re-validate rather than model_copy so bad overrides are rejected
    return Settings.model_validate({**settings.model_dump(), **overrides})


if __name__ == "__main__":
    app()
