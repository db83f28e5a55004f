"""Data models for the docs review board."""

from dataclasses import dataclass, field
from enum import Enum

# Board field names
FIELD_STATUS = "Status"
FIELD_DATE_POSTED = "Date posted"
FIELD_REVIEW_DUE_DATE = "Review due date"
FIELD_FEATURE = "Feature"
FIELD_CONTRIBUTOR_TYPE = "Contributor type"
FIELD_SIZE = "Size"
FIELD_CONTRIBUTOR = "Contributor"

# Single-select option names
STATUS_READY_FOR_REVIEW = "Ready for review"
CONTRIBUTOR_HUBBER = "Hubber or partner"
CONTRIBUTOR_DOCS_TEAM = "Docs team"
CONTRIBUTOR_OS = "OS contributor"


class SizeCategory(Enum):
    """Size bucket for a review item, smallest first."""

    XS = "XS"
    S = "S"
    M = "M"
    L = "L"


class ContributorType(Enum):
    """How the author of an item relates to the docs team."""

    DOCS_TEAM = "docs-team-member"
    ORG_MEMBER = "org-member"
    OPEN_SOURCE = "open-source-contributor"
    FALLBACK_ORG_MEMBER = "fallback-org-member"

    @property
    def option_name(self) -> str:
        """Name of the "Contributor type" option this classification maps to."""
        if self is ContributorType.DOCS_TEAM:
            return CONTRIBUTOR_DOCS_TEAM
        if self is ContributorType.OPEN_SOURCE:
            return CONTRIBUTOR_OS
        # Unrecognized authors land in the hubber column so the item stays visible
        return CONTRIBUTOR_HUBBER


@dataclass
class ProjectField:
    """A project field, with options when it is a single-select field."""

    id: str
    name: str
    options: dict[str, str] = field(default_factory=dict)  # option name -> option ID


@dataclass
class BoardSchema:
    """Field definitions of a project board, fetched fresh on every run."""

    project_id: str
    fields: list[ProjectField] = field(default_factory=list)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


@dataclass(frozen=True)
class ChangedFile:
    """A file touched by a pull request."""

    path: str
    additions: int = 0
    deletions: int = 0

    @property
    def changes(self) -> int:
        return self.additions + self.deletions


@dataclass(frozen=True)
class PullRequestItem:
    """A pull request being filed for review."""

    node_id: str
    files: tuple[ChangedFile, ...] = ()

    @property
    def num_files(self) -> int:
        return len(self.files)

    @property
    def num_changes(self) -> int:
        return sum(f.changes for f in self.files)


@dataclass(frozen=True)
class IssueItem:
    """An issue being filed for review. Issues carry no file data."""

    node_id: str


TargetItem = PullRequestItem | IssueItem


@dataclass
class ResolvedFields:
    """Everything derived for an item before the board is mutated."""

    size: SizeCategory
    feature: str
    contributor_type: ContributorType
    author_label: str
    turnaround_days: int
    first_time_contributor: bool | None = None
