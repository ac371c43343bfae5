"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from agent_release_manager.configuration.exceptions import RequiredConfigurationElementError
from agent_release_manager.configuration.reconcile import reconcile_release_configuration
from agent_release_manager.exceptions import ReleaseError
from agent_release_manager.release_notes.models import ReleaseBranchResult, ReleaseStatus
from agent_release_manager.release_notes.orchestrator import ReleaseOrchestrator
from agent_release_manager.release_notes.validator import validate_version
from agent_release_manager.utils.log import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Cut a release branch for the agent.")


async def run_release_branch_workflow(
    version: str,
    dry_run: bool,
    derived_from: str | None,
    editor_command: str | None,
    repo: str | None,
    repo_root: Path | None,
    version_file: Path | None,
    release_notes_file: Path | None,
    github_api_url: str | None,
    github_pat_token: str | None,
    debug: bool,
) -> ReleaseBranchResult:
    """Reconcile the configuration and run the release orchestrator."""
    config = await reconcile_release_configuration(
        cli_version=version,
        cli_dry_run=dry_run,
        cli_derived_from=derived_from,
        cli_editor_command=editor_command,
        cli_repo=repo,
        cli_repo_root=repo_root,
        cli_version_file=version_file,
        cli_release_notes_file=release_notes_file,
        cli_github_api_url=github_api_url,
        cli_github_pat_token=github_pat_token,
        cli_debug=debug,
    )
    return await ReleaseOrchestrator(config).run()


def echo_dry_run(result: ReleaseBranchResult) -> None:
    """Print what a real run would have written."""
    typer.echo(f"Found the following PRs merged since {result.derived_from} release:")
    for category, entries in result.classified.items():
        typer.echo(f"{category}: {len(entries)}")
        for entry in entries:
            typer.echo(f"  {entry.strip()}")
    typer.echo("\n")
    typer.echo(result.release_notes)


@typer_app.command(name="create-release-branch")
def create_release_branch_cli(
    version: Annotated[str, Argument(help="Version of the new release (<major>.<minor>.<patch>).")],
    dry_run: Annotated[
        bool, Option("--dryrun", "--dry-run", help="Dry run only, do not write files, open the editor, commit or push.")
    ] = False,
    derived_from: Annotated[
        str | None,
        Option("--derived-from", "--derivedFrom", help="Release whose publish date selects the merged PRs ('latest' or a version)."),
    ] = None,
    editor_command: Annotated[str | None, Option("--editor", envvar="EDITOR", help="Editor command used to review the release notes.")] = None,
    repo: Annotated[str | None, Option(envvar="REPO", help="GitHub repository (owner/repo).")] = None,
    repo_root: Annotated[Path | None, Option(help="Root of the local clone. Defaults to the current directory.")] = None,
    version_file: Annotated[Path | None, Option(help="Version file, relative to the clone root.")] = None,
    release_notes_file: Annotated[Path | None, Option(help="Release notes file, relative to the clone root.")] = None,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Validate the version, update the version file and release notes, and push a release branch."""
    configure_logging(debug)
    try:
        result = asyncio.run(
            run_release_branch_workflow(
                version=version,
                dry_run=dry_run,
                derived_from=derived_from,
                editor_command=editor_command,
                repo=repo,
                repo_root=repo_root,
                version_file=version_file,
                release_notes_file=release_notes_file,
                github_api_url=github_api_url,
                github_pat_token=github_pat_token,
                debug=debug,
            )
        )
    except (ReleaseError, RequiredConfigurationElementError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if result.status == ReleaseStatus.DRY_RUN:
        echo_dry_run(result)
    else:
        typer.echo(f"Pushed branch {result.branch} with {result.pull_request_count} PRs in the release notes")
    typer.echo("done.")


@typer_app.command(name="validate-version")
def validate_version_cli(
    version: Annotated[str, Argument(help="Version to check (<major>.<minor>.<patch>).")],
) -> None:
    """Check a version string against the release version format without contacting GitHub."""
    try:
        validated = validate_version(version)
    except ReleaseError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    typer.echo(f"Version {validated} is valid (tag {validated.tag})")


if __name__ == "__main__":
    typer_app()
