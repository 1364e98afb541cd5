"""Turn SonarCloud issues into a single GitHub pull request review."""

from __future__ import annotations

import logging

import requests
from github import GithubException
from rich.console import Console

from sonarlens_core.errors import PublishError
from sonarlens_core.gh.pull_request import create_review, get_changed_files, get_pull
from sonarlens_core.models import REVIEW_EVENT, Issue, ReviewComment, ReviewSummary
from sonarlens_core.sonar.issues import SONARCLOUD_URL

console = Console()
logger = logging.getLogger(__name__)


def component_to_path(component: str, project_key: str) -> str:
    """Strip a leading "<project_key>:" from a SonarCloud component key.

    Only the prefix is removed; the key appearing later in the path is left alone.
    """
    prefix = f"{project_key}:"
    if component.startswith(prefix):
        return component[len(prefix) :]
    return component


def issue_url(project_key: str, issue_key: str) -> str:
    return f"{SONARCLOUD_URL}/project/issues?id={project_key}&issues={issue_key}&open={issue_key}"


def format_comment_body(issue: Issue, project_key: str) -> str:
    return (
        f"🔍 **SonarCloud Issue ({issue.severity})**: {issue.message}\n\n"
        f"[View in SonarCloud]({issue_url(project_key, issue.key)})"
    )


def build_review_body(comment_count: int) -> str:
    return (
        "## SonarCloud Review\n\n"
        f"Found {comment_count} issues in your code that need to be addressed.\n\n"
        "Please review and fix the identified issues to improve your code quality."
    )


def build_comments(issues: list[Issue], changed_files: list[str], project_key: str) -> list[ReviewComment]:
    """Build one comment per issue whose file is part of the PR.

    Comments come out grouped by file, files in first-seen order, issues in
    their original order within each file. Issues outside the PR are dropped.
    """
    in_pr = set(changed_files)
    by_file: dict[str, list[ReviewComment]] = {}

    for issue in issues:
        path = component_to_path(issue.component, project_key)
        if path not in in_pr:
            logger.debug("Skipping issue %s: %s is not part of the PR", issue.key, path)
            continue
        by_file.setdefault(path, []).append(
            ReviewComment(path=path, line=issue.line, body=format_comment_body(issue, project_key))
        )

    return [comment for file_comments in by_file.values() for comment in file_comments]


def print_shadow_comments(comments: list[ReviewComment]) -> None:
    """Print review comments to the terminal without posting to GitHub."""
    console.print(f"\n[bold]Shadow review — {len(comments)} comment(s) (not posted)[/bold]\n")
    for c in comments:
        where = f"line [bold]{c.line}[/bold]" if c.line is not None else "[dim]file-level[/dim]"
        console.print(f"[bold cyan]{c.path}[/bold cyan]  {where}")
        console.print(f"  {c.body}")
        console.print()


def publish_review(
    repo,
    pr_number: int,
    issues: list[Issue],
    project_key: str,
    shadow: bool = False,
) -> ReviewSummary | None:
    """Post the in-PR issues as one REQUEST_CHANGES review.

    ``repo`` is a PyGithub Repository (or anything shaped like one). Returns
    None when no issue touches a changed file; nothing is posted then.
    Raises PublishError when GitHub rejects or cannot be reached for listing
    the files or creating the review.
    """
    try:
        pr = get_pull(repo, pr_number)
        changed_files = get_changed_files(pr)
    except (GithubException, requests.RequestException) as e:
        raise PublishError(f"Failed to list files of PR #{pr_number}: {_github_message(e)}")

    comments = build_comments(issues, changed_files, project_key)

    if not comments:
        console.print("No comments to add to PR review - no issues found in PR files")
        return None

    summary = ReviewSummary(
        repo=getattr(repo, "full_name", ""),
        pr_number=pr_number,
        event=REVIEW_EVENT,
        total_issues=len(issues),
        total_comments=len(comments),
        dropped_issues=len(issues) - len(comments),
        comments=comments,
    )

    if shadow:
        print_shadow_comments(comments)
        console.print(f"[bold]Shadow review complete. {len(comments)} comment(s) would be posted.[/bold]")
        return summary

    try:
        create_review(
            pr,
            body=build_review_body(len(comments)),
            event=REVIEW_EVENT,
            comments=[c.to_api() for c in comments],
        )
    except (GithubException, requests.RequestException) as e:
        raise PublishError(f"Failed to create PR review: {_github_message(e)}")

    summary.posted = True
    console.print(f"[green]Created PR review with {len(comments)} comments[/green]")
    return summary


def _github_message(exc: Exception) -> str:
    data = getattr(exc, "data", None)
    if not isinstance(data, dict):
        data = {}
    message = data.get("message") or str(exc)
    errors = data.get("errors")
    if errors:
        message = f"{message} ({errors})"
    return message
