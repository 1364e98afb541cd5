from __future__ import annotations

from github import Github


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def get_changed_files(pr) -> list[str]:
    """Return the filenames touched by the PR, in the order GitHub lists them.

    PyGithub's PaginatedList walks every page, so large PRs are not cut off
    at the first 30 files.
    """
    return [f.filename for f in pr.get_files()]


def create_review(pr, body: str, event: str, comments: list[dict]):
    return pr.create_review(body=body, event=event, comments=comments)
