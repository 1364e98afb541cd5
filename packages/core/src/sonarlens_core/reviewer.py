"""Core run pipeline: fetch SonarCloud issues, then publish them as a review."""

from __future__ import annotations

import logging

import requests
from github import GithubException
from rich.console import Console

from sonarlens_core.errors import PublishError
from sonarlens_core.gh.pull_request import get_repo
from sonarlens_core.models import ReviewSummary
from sonarlens_core.publisher import publish_review
from sonarlens_core.sonar.issues import fetch_issues

console = Console()
logger = logging.getLogger(__name__)


def run_review(
    inputs: dict,
    repo_obj=None,
    session=None,
    shadow: bool = False,
) -> ReviewSummary | None:
    """Run fetch → publish sequentially for the resolved inputs.

    ``inputs`` is the dict returned by resolve_inputs(). Returns None when
    there is nothing to post (no issues, or none in PR files). Errors from
    either stage propagate as SonarLensError subclasses.
    """
    project_key = inputs["project_key"]
    pr_number = inputs["pr_number"]

    console.print(f"Fetching SonarCloud issues for project {project_key}...")
    issues = fetch_issues(inputs["sonar_token"], project_key, pr_number, session=session)

    if not issues:
        console.print("[green]No issues found in SonarCloud analysis. Great job![/green]")
        return None

    console.print(f"Found {len(issues)} issues to review.")

    if repo_obj is not None:
        this_repo = repo_obj
    else:
        try:
            this_repo = get_repo(inputs["repo"], token=inputs["github_token"])
        except (GithubException, requests.RequestException) as e:
            raise PublishError(f"Could not open repository {inputs['repo']}: {e}")

    summary = publish_review(this_repo, pr_number, issues, project_key, shadow=shadow)
    if summary is not None:
        logger.debug("%d of %d issue(s) were outside the PR files", summary.dropped_issues, summary.total_issues)
    return summary
