"""GitHub token resolution with gh CLI fallback.

Resolution order (stops at first success):
  1. --github-token option
  2. INPUT_GITHUB-TOKEN / GITHUB_TOKEN environment variables
  3. `gh auth token` (GitHub CLI session, for local runs)
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("INPUT_GITHUB-TOKEN", "GITHUB_TOKEN")


def resolve_github_token(explicit: str | None = None) -> str | None:
    """Return a GitHub token or None if no valid source is available.

    Never raises; resolve_inputs reports the missing token.
    """
    if explicit and explicit.strip():
        return explicit.strip()

    for var in _TOKEN_ENV_VARS:
        token = os.environ.get(var, "").strip()
        if token:
            return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            gh_token = result.stdout.strip()
            if gh_token:
                logger.debug("Resolved GitHub token via gh CLI session.")
                return gh_token
    except (FileNotFoundError, subprocess.TimeoutExpired):
        # gh is not installed or timed out.
        pass

    return None
