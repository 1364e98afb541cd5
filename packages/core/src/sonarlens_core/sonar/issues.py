"""SonarCloud issue search.

Docs: https://sonarcloud.io/web_api/api/issues/search
"""

from __future__ import annotations

import logging

import requests

from sonarlens_core.errors import FetchError, ParseError
from sonarlens_core.models import Issue

logger = logging.getLogger(__name__)

SONARCLOUD_URL = "https://sonarcloud.io"
ISSUES_SEARCH_PATH = "/api/issues/search"


def fetch_issues(token: str, project_key: str, pr_number: int, session: requests.Session | None = None) -> list[Issue]:
    """Return the unresolved issues SonarCloud reports for a pull request.

    The token is sent as the Basic auth username with an empty password.
    No timeout or retry is applied. Raises FetchError on transport failure
    or a non-200 status, ParseError when the body is not the expected JSON.
    """
    url = SONARCLOUD_URL + ISSUES_SEARCH_PATH
    params = {
        "componentKeys": project_key,
        "pullRequest": pr_number,
        "resolved": "false",
    }
    http = session if session is not None else requests

    logger.debug("GET %s componentKeys=%s pullRequest=%s", url, project_key, pr_number)
    try:
        response = http.get(url, params=params, auth=(token, ""))
    except requests.RequestException as e:
        raise FetchError(f"SonarCloud API request failed: {e}")

    if response.status_code != 200:
        raise FetchError(
            f"SonarCloud API request failed with status code {response.status_code}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        raise ParseError(f"Failed to parse SonarCloud API response: {e}")

    issues = data.get("issues") if isinstance(data, dict) else None
    if not isinstance(issues, list):
        raise ParseError("Failed to parse SonarCloud API response: no 'issues' array in body")

    return [Issue.from_dict(item) for item in issues]
