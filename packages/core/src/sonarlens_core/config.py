import os
from typing import Optional

from sonarlens_core.errors import ConfigurationError

# Sources for each input, in order of precedence after CLI overrides.
# INPUT_* names are what the GitHub Actions runner exports for action inputs.
INPUT_ENV_VARS: dict = {
    "project_key": ("INPUT_PROJECT-KEY", "SONAR_PROJECT_KEY"),
    "sonar_token": ("INPUT_SONAR-TOKEN", "SONAR_TOKEN"),
    "github_token": ("INPUT_GITHUB-TOKEN", "GITHUB_TOKEN"),
    "pr_number": ("INPUT_PR-NUMBER", "PR_NUMBER"),
    "repo": ("GITHUB_REPOSITORY",),
}

INPUT_LABELS: dict = {
    "project_key": "project-key",
    "sonar_token": "sonar-token",
    "github_token": "github-token",
    "pr_number": "pr-number",
    "repo": "repository (owner/name)",
}


def _from_env(name: str) -> Optional[str]:
    for var in INPUT_ENV_VARS[name]:
        value = os.environ.get(var, "").strip()
        if value:
            return value
    return None


def resolve_inputs(cli_overrides: Optional[dict] = None) -> dict:
    """
    Resolve the run inputs by merging (in order of precedence):
      1. CLI argument overrides
      2. GitHub Actions input variables (INPUT_*)
      3. Conventional environment variables

    Every input is required. Raises ConfigurationError naming the first
    missing one, or when pr-number is not an integer.
    """
    overrides = cli_overrides or {}
    inputs: dict = {}

    for name in INPUT_ENV_VARS:
        value = overrides.get(name)
        if isinstance(value, str):
            value = value.strip() or None
        if value is None:
            value = _from_env(name)
        if value is None:
            raise ConfigurationError(f"Input required and not supplied: {INPUT_LABELS[name]}")
        inputs[name] = value

    try:
        inputs["pr_number"] = int(inputs["pr_number"])
    except (TypeError, ValueError):
        raise ConfigurationError(f"pr-number must be an integer, got {inputs['pr_number']!r}")

    return inputs
