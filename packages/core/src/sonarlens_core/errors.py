"""Error kinds raised by sonarlens_core.

Core code raises these and never exits the process; the CLI layer is the
only place that turns them into a failed run.
"""

from __future__ import annotations


class SonarLensError(Exception):
    """Base class for every failure that ends a run."""


class ConfigurationError(SonarLensError):
    """A required input is missing or unusable."""


class FetchError(SonarLensError):
    """SonarCloud could not be reached or answered with a non-200 status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(SonarLensError):
    """SonarCloud answered 200 but the body is not the expected JSON."""


class PublishError(SonarLensError):
    """GitHub rejected a pull request call."""
