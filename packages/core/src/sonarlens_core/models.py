"""Value types passed between the fetch and publish stages."""

from __future__ import annotations

from dataclasses import dataclass, field

REVIEW_EVENT = "REQUEST_CHANGES"


@dataclass(frozen=True)
class Issue:
    """A single unresolved SonarCloud finding, as returned by issues/search."""

    key: str
    component: str  # "<project_key>:<path>"
    severity: str
    message: str
    line: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Issue:
        return cls(
            key=data.get("key", ""),
            component=data.get("component", ""),
            severity=data.get("severity", ""),
            message=data.get("message", ""),
            line=data.get("line") or None,
        )


@dataclass(frozen=True)
class ReviewComment:
    """One inline comment of the review. ``line=None`` means a file-level comment."""

    path: str
    body: str
    line: int | None = None

    def to_api(self) -> dict:
        """Return the dict shape PullRequest.create_review expects."""
        payload = {"path": self.path, "body": self.body}
        if self.line is not None:
            payload["line"] = self.line
        return payload


@dataclass
class ReviewSummary:
    """Result returned by publish_review, for logging and the CLI exit message."""

    repo: str
    pr_number: int
    event: str
    total_issues: int = 0
    total_comments: int = 0
    dropped_issues: int = 0
    posted: bool = False
    comments: list[ReviewComment] = field(default_factory=list)
