"""Derivation rules for review board field values.

Everything here is pure: values are computed from already-fetched data,
with membership checks passed in as callables.
"""

from collections.abc import Callable, Iterable
from datetime import date, timedelta

from docs_review.board.models import (
    ContributorType,
    IssueItem,
    PullRequestItem,
    SizeCategory,
    TargetItem,
)
from docs_review.config import ReviewSettings

# Thresholds are exclusive upper bounds, checked in order
SIZE_THRESHOLDS: list[tuple[SizeCategory, int, int]] = [
    (SizeCategory.XS, 5, 10),
    (SizeCategory.S, 10, 50),
    (SizeCategory.M, 10, 250),
]


def classify_size(num_files: int, num_changes: int) -> SizeCategory:
    """Classify a change set by file count and total added + deleted lines.

    The first matching bucket wins; anything outside all buckets is L.
    """
    for size, max_files, max_changes in SIZE_THRESHOLDS:
        if num_files < max_files and num_changes < max_changes:
            return size
    return SizeCategory.L


def size_for_item(item: TargetItem) -> SizeCategory:
    """Size an item. Issues have no file data and are always S."""
    if isinstance(item, IssueItem):
        return SizeCategory.S
    return classify_size(item.num_files, item.num_changes)


def extract_features(paths: Iterable[str], content_root: str = "content") -> set[str]:
    """Collect the docs sets touched by a list of paths.

    A docs set is the second segment of a path under `content_root`, e.g.
    `content/actions/index.md` -> `actions`. Asset and data paths are ignored.
    """
    features = set()
    for path in paths:
        parts = path.split("/")
        if len(parts) > 1 and parts[0] == content_root:
            features.add(parts[1])
    return features


def feature_string(item: TargetItem, content_root: str = "content") -> str:
    """Comma-separated docs sets for an item, empty for issues."""
    if isinstance(item, PullRequestItem):
        features = extract_features((f.path for f in item.files), content_root)
        return ",".join(sorted(features))
    return ""


def classify_contributor(
    login: str,
    repo: str,
    *,
    is_docs_team_member: Callable[[str], bool],
    is_org_member: Callable[[str], bool],
    open_source_repo: str,
) -> ContributorType:
    """Classify the author of an item.

    Membership checks are evaluated lazily in rule order, so the org lookup
    is skipped for docs team members.
    """
    # Rule 1: docs team
    if is_docs_team_member(login):
        return ContributorType.DOCS_TEAM

    # Rule 2: organization member
    if is_org_member(login):
        return ContributorType.ORG_MEMBER

    # Rule 3: outside contributor to the open source repo
    if repo == open_source_repo:
        return ContributorType.OPEN_SOURCE

    # Rule 4: default
    return ContributorType.FALLBACK_ORG_MEMBER


def count_repo_contributions(contributions: dict, repo: str) -> int:
    """Sum a user's pull request and issue contributions to one repository.

    Args:
        contributions: A `contributionsCollection` GraphQL node
        repo: Repository in "owner/repo" format

    Returns:
        Total count; a repository absent from either list counts as zero
    """
    total = 0
    for key in ("pullRequestContributionsByRepository", "issueContributionsByRepository"):
        for entry in contributions.get(key) or []:
            if entry["repository"]["nameWithOwner"] == repo:
                total += entry["contributions"]["totalCount"]
                break
    return total


def is_first_time_contributor(contribution_count: int) -> bool:
    """True when the author has at most one recorded contribution.

    The triggering item may already be included in the count.
    """
    return contribution_count <= 1


def author_label(login: str, first_time_contributor: bool | None, settings: ReviewSettings) -> str:
    if first_time_contributor:
        return settings.first_time_label
    return login


def turnaround_days(repo: str, settings: ReviewSettings) -> int:
    """Days allowed for review; the open source repo gets longer."""
    if repo == settings.open_source_repo:
        return settings.open_source_turnaround_days
    return settings.turnaround_days


def review_due_date(posted: date, days: int, *, skip_weekends: bool = False) -> date:
    """Compute the review due date.

    Args:
        posted: Date the item was posted to the board
        days: Turnaround in days
        skip_weekends: Count only Monday-Friday as turnaround days

    Returns:
        The due date
    """
    if not skip_weekends:
        return posted + timedelta(days=days)

    due = posted
    added = 0
    while added < days:
        due += timedelta(days=1)
        if due.weekday() < 5:
            added += 1
    return due
