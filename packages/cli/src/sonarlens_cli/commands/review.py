"""review command — post SonarCloud issues on a pull request."""

from __future__ import annotations

import os

import click
from rich.console import Console

from sonarlens_core.errors import ConfigurationError, SonarLensError
from sonarlens_core.reviewer import run_review

console = Console()


def _fail(message: str, usage: bool = False):
    # Annotate the workflow run when executed inside GitHub Actions.
    if os.environ.get("GITHUB_ACTIONS") == "true":
        click.echo(f"::error::{message}")
    if usage:
        return click.UsageError(message)
    return click.ClickException(message)


@click.command("review")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to $GITHUB_REPOSITORY.")
@click.option("--project-key", default=None, help="SonarCloud project key.")
@click.option("--sonar-token", default=None, help="SonarCloud API token.")
@click.option("--github-token", default=None, help="GitHub token with pull request write access.")
@click.option("--pr", "pr_number", default=None, help="Pull request number.")
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print review comments without posting to GitHub.",
)
def review_cmd(
    repo: str | None,
    project_key: str | None,
    sonar_token: str | None,
    github_token: str | None,
    pr_number: str | None,
    shadow: bool,
):
    """Post SonarCloud issues as a REQUEST_CHANGES review on a pull request.

    Only issues on files changed by the pull request are posted.

    \b
    Inputs not given as options are read from the environment:
      INPUT_PROJECT-KEY / SONAR_PROJECT_KEY
      INPUT_SONAR-TOKEN / SONAR_TOKEN
      INPUT_GITHUB-TOKEN / GITHUB_TOKEN  (or the gh CLI session)
      INPUT_PR-NUMBER / PR_NUMBER
      GITHUB_REPOSITORY
    """
    from sonarlens_cli.auth import resolve_github_token
    from sonarlens_core.config import resolve_inputs

    overrides = {
        "repo": repo,
        "project_key": project_key,
        "sonar_token": sonar_token,
        "github_token": resolve_github_token(github_token),
        "pr_number": pr_number,
    }

    try:
        inputs = resolve_inputs(cli_overrides=overrides)
    except ConfigurationError as e:
        raise _fail(str(e), usage=True)

    try:
        summary = run_review(inputs, shadow=shadow)
    except SonarLensError as e:
        raise _fail(f"Action failed: {e}")

    if summary is not None and summary.dropped_issues:
        console.print(f"[dim]{summary.dropped_issues} issue(s) outside the PR files were not posted.[/dim]")
