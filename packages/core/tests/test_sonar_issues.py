"""Tests for the SonarCloud issue fetcher."""

from unittest.mock import MagicMock

import pytest
import requests

from sonarlens_core.errors import FetchError, ParseError
from sonarlens_core.models import Issue
from sonarlens_core.sonar.issues import fetch_issues


def _response(status_code=200, payload=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status_code
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


def _session(response):
    session = MagicMock()
    session.get.return_value = response
    return session


ISSUE = {
    "key": "AYx1",
    "component": "acme_web:src/a.js",
    "line": 12,
    "severity": "MAJOR",
    "message": "Remove this unused variable.",
}


class TestFetchIssues:
    def test_sends_scoped_query_with_basic_auth(self):
        session = _session(_response(payload={"issues": []}))

        fetch_issues("sq-token", "acme_web", 17, session=session)

        session.get.assert_called_once_with(
            "https://sonarcloud.io/api/issues/search",
            params={"componentKeys": "acme_web", "pullRequest": 17, "resolved": "false"},
            auth=("sq-token", ""),
        )

    def test_uses_requests_module_without_session(self, mocker):
        mock_get = mocker.patch("sonarlens_core.sonar.issues.requests.get", return_value=_response(payload={"issues": []}))

        assert fetch_issues("sq-token", "acme_web", 17) == []
        mock_get.assert_called_once()

    def test_returns_issues_in_order(self):
        second = dict(ISSUE, key="AYx2", line=None)
        session = _session(_response(payload={"issues": [ISSUE, second], "total": 2}))

        issues = fetch_issues("t", "acme_web", 1, session=session)

        assert [i.key for i in issues] == ["AYx1", "AYx2"]
        assert issues[0] == Issue(
            key="AYx1",
            component="acme_web:src/a.js",
            severity="MAJOR",
            message="Remove this unused variable.",
            line=12,
        )
        assert issues[1].line is None

    def test_missing_line_is_none(self):
        issue = {k: v for k, v in ISSUE.items() if k != "line"}
        session = _session(_response(payload={"issues": [issue]}))
        assert fetch_issues("t", "acme_web", 1, session=session)[0].line is None

    def test_empty_issue_list(self):
        session = _session(_response(payload={"issues": []}))
        assert fetch_issues("t", "acme_web", 1, session=session) == []

    def test_non_200_raises_fetch_error_with_status(self):
        session = _session(_response(status_code=403))

        with pytest.raises(FetchError, match="403") as exc_info:
            fetch_issues("t", "acme_web", 1, session=session)

        assert exc_info.value.status_code == 403

    def test_transport_error_raises_fetch_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(FetchError, match="connection refused") as exc_info:
            fetch_issues("t", "acme_web", 1, session=session)

        assert exc_info.value.status_code is None

    def test_malformed_json_raises_parse_error(self):
        session = _session(_response(json_error=ValueError("Expecting value: line 1 column 1")))

        with pytest.raises(ParseError, match="Expecting value"):
            fetch_issues("t", "acme_web", 1, session=session)

    def test_body_without_issues_array_raises_parse_error(self):
        session = _session(_response(payload={"errors": [{"msg": "nope"}]}))

        with pytest.raises(ParseError, match="issues"):
            fetch_issues("t", "acme_web", 1, session=session)
