"""CLI entry point for docs-review.

Usage:
    python -m docs_review                 # File the item named by ITEM_NODE_ID
    python -m docs_review --dry-run       # Show what would be set, change nothing
    python -m docs_review --config board.toml

Or via the installed command:
    docs-review
    docs-review --dry-run

The run is described by environment variables (a .env file is also read):
ITEM_NODE_ID, ORGANIZATION, PROJECT_NUMBER, TOKEN, REPO, AUTHOR_LOGIN.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from docs_review._version import get_full_version_string
from docs_review.board.github_api import GitHubClient
from docs_review.board.models import STATUS_READY_FOR_REVIEW
from docs_review.board.review import ReviewPlan, file_item_for_review, plan_review
from docs_review.config import ReviewConfig, load_review_config, load_settings

console = Console()


def configure_logging() -> None:
    """Send log records through rich, at the level named by LOG_LEVEL."""
    level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def print_plan(config: ReviewConfig, plan: ReviewPlan) -> None:
    """Print the values a run would set."""
    resolved = plan.resolved
    table = Table(title=f"Review fields for {config.item_node_id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Item type", type(plan.item).__name__)
    values = {u.alias: u.variable_value for u in plan.updates}
    table.add_row("Status", STATUS_READY_FOR_REVIEW)
    table.add_row("Date posted", str(values["datePosted"]))
    table.add_row("Review due date", str(values["reviewDueDate"]))
    table.add_row("Size", resolved.size.value)
    table.add_row("Feature", resolved.feature or "[dim](none)[/]")
    table.add_row("Contributor type", resolved.contributor_type.option_name)
    table.add_row("Contributor", resolved.author_label)
    table.add_row("Turnaround", f"{resolved.turnaround_days} days")
    console.print(table)


def run(config: ReviewConfig, *, dry_run: bool = False) -> int:
    """File the configured item on the review board.

    Returns:
        Exit code (0 for success)
    """
    with GitHubClient(token=config.token) as client:
        if dry_run:
            plan = plan_review(config, client)
            print_plan(config, plan)
            console.print("[yellow]Dry run - board not modified[/]")
            return 0

        file_item_for_review(config, client)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Any failure prints a single "#ERROR# <message>" line and returns 1.
    """
    parser = argparse.ArgumentParser(
        prog="docs-review",
        description="Add an issue or pull request to the docs review board",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Environment:
  ITEM_NODE_ID     GraphQL node ID of the issue or PR
  ORGANIZATION     Organization that owns the project
  PROJECT_NUMBER   Project number
  TOKEN            Token with project write access (or GITHUB_TOKEN)
  REPO             Repository the item comes from, as owner/repo
  AUTHOR_LOGIN     Login of the item's author

Configuration:
  .docs-review/config.toml (or DOCS_REVIEW_CONFIG / --config):
    [review]
    open_source_repo = "github/docs"
    docs_team_slug = "docs"
    turnaround_days = 2
""",
    )
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show the field values without adding the item to the board",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to a TOML settings file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=get_full_version_string(),
    )

    args = parser.parse_args(argv)

    load_dotenv()

    try:
        configure_logging()
        settings = load_settings(args.config)
        config = load_review_config(settings=settings)
        return run(config, dry_run=args.dry_run)
    except Exception as e:
        console.print(f"#ERROR# {e}", markup=False, highlight=False, soft_wrap=True)
        logging.getLogger(__name__).debug("Run failed", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
