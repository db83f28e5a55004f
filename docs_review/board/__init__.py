"""GitHub Project board operations for docs review.

Fetches the board schema, derives field values for an issue or PR and
writes them back through the GraphQL API.
"""

from docs_review.board.github_api import GitHubClient
from docs_review.board.models import (
    BoardSchema,
    ContributorType,
    IssueItem,
    PullRequestItem,
    SizeCategory,
    TargetItem,
)
from docs_review.board.review import file_item_for_review, plan_review
from docs_review.board.schema import FieldLookupError, find_field_id, find_single_select_id

__all__ = [
    "BoardSchema",
    "ContributorType",
    "FieldLookupError",
    "GitHubClient",
    "IssueItem",
    "PullRequestItem",
    "SizeCategory",
    "TargetItem",
    "file_item_for_review",
    "find_field_id",
    "find_single_select_id",
    "plan_review",
]
