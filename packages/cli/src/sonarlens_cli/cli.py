"""CLI entry point for sonarlens.

Commands:
  review   — post SonarCloud issues for a pull request as a GitHub review
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.logging import RichHandler

from sonarlens_cli.commands.review import review_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("sonarlens"),
    prog_name="sonarlens",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(verbose: bool):
    """Post SonarCloud pull request issues as inline GitHub review comments."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


main.add_command(review_cmd)
