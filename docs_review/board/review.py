"""File an issue or pull request on the docs review board.

The run is a fixed sequence of calls, each depending on the previous one:

1. Fetch the board schema and the target item
2. Resolve every field and option ID (fails before anything is written)
3. Derive size, feature, contributor type and author label
4. Add the item to the board
5. Set all fields in one mutation
"""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime

from docs_review.board.derive import (
    author_label,
    classify_contributor,
    count_repo_contributions,
    feature_string,
    is_first_time_contributor,
    review_due_date,
    size_for_item,
    turnaround_days,
)
from docs_review.board.github_api import GitHubClient
from docs_review.board.models import ResolvedFields, TargetItem
from docs_review.board.mutation import FieldUpdate, ValueKind
from docs_review.board.schema import BoardIds, resolve_board_ids
from docs_review.config import ReviewConfig

logger = logging.getLogger(__name__)


@dataclass
class ReviewPlan:
    """Everything needed to populate the board, computed before any write."""

    ids: BoardIds
    item: TargetItem
    resolved: ResolvedFields
    updates: list[FieldUpdate]


def check_first_time_contributor(config: ReviewConfig, client: GitHubClient) -> bool | None:
    """Check contribution history, only for the open source repo.

    Returns:
        True/False for the open source repo, None for any other repo
    """
    if not config.is_open_source_repo:
        return None

    contributions = client.get_contributions(config.author_login)
    count = count_repo_contributions(contributions, config.settings.open_source_repo)
    logger.info(
        "%s has %d contribution(s) to %s",
        config.author_login,
        count,
        config.settings.open_source_repo,
    )
    return is_first_time_contributor(count)


def resolve_fields(config: ReviewConfig, client: GitHubClient, item: TargetItem) -> ResolvedFields:
    """Derive every field value for the item."""
    settings = config.settings
    first_time = check_first_time_contributor(config, client)

    contributor_type = classify_contributor(
        config.author_login,
        config.repo,
        is_docs_team_member=lambda login: client.is_team_member(
            config.organization, settings.docs_team_slug, login
        ),
        is_org_member=lambda login: client.is_org_member(config.organization, login),
        open_source_repo=settings.open_source_repo,
    )

    return ResolvedFields(
        size=size_for_item(item),
        feature=feature_string(item, settings.content_root),
        contributor_type=contributor_type,
        author_label=author_label(config.author_login, first_time, settings),
        turnaround_days=turnaround_days(config.repo, settings),
        first_time_contributor=first_time,
    )


def build_field_updates(
    ids: BoardIds,
    resolved: ResolvedFields,
    posted: date,
    *,
    skip_weekends: bool = False,
) -> list[FieldUpdate]:
    """Map resolved values onto the board's field and option IDs."""
    due = review_due_date(posted, resolved.turnaround_days, skip_weekends=skip_weekends)
    return [
        FieldUpdate("status", ids.status_field, ValueKind.SINGLE_SELECT, ids.ready_for_review_option),
        FieldUpdate("datePosted", ids.date_posted_field, ValueKind.DATE, posted),
        FieldUpdate("reviewDueDate", ids.review_due_date_field, ValueKind.DATE, due),
        FieldUpdate(
            "contributorType",
            ids.contributor_type_field,
            ValueKind.SINGLE_SELECT,
            ids.contributor_type_options[resolved.contributor_type],
        ),
        FieldUpdate(
            "size", ids.size_field, ValueKind.SINGLE_SELECT, ids.size_options[resolved.size]
        ),
        FieldUpdate("feature", ids.feature_field, ValueKind.TEXT, resolved.feature),
        FieldUpdate("author", ids.contributor_field, ValueKind.TEXT, resolved.author_label),
    ]


def plan_review(
    config: ReviewConfig, client: GitHubClient, *, today: date | None = None
) -> ReviewPlan:
    """Fetch the board and item and work out every field value. Read-only."""
    schema, item = client.get_review_board(
        config.organization, config.project_number, config.item_node_id
    )
    ids = resolve_board_ids(schema)
    resolved = resolve_fields(config, client, item)
    posted = today or datetime.now(UTC).date()
    updates = build_field_updates(
        ids, resolved, posted, skip_weekends=config.settings.skip_weekends
    )
    return ReviewPlan(ids=ids, item=item, resolved=resolved, updates=updates)


def file_item_for_review(
    config: ReviewConfig, client: GitHubClient, *, today: date | None = None
) -> str:
    """Add the item to the review board and populate its fields.

    Returns:
        The new project item ID
    """
    plan = plan_review(config, client, today=today)

    new_item_id = client.add_item_to_project(plan.ids.project_id, config.item_node_id)
    logger.info("Populating fields for item: %s", new_item_id)

    client.update_item_fields(plan.ids.project_id, new_item_id, plan.updates)
    logger.info("Done populating fields for item")

    return new_item_id
