"""GitHub GraphQL API interactions for the docs review board."""

import logging

from docs_review.board.api_logging import create_logging_client
from docs_review.board.models import (
    BoardSchema,
    ChangedFile,
    IssueItem,
    PullRequestItem,
    TargetItem,
)
from docs_review.board.mutation import FieldUpdate, build_update_mutation
from docs_review.board.schema import parse_board_schema

logger = logging.getLogger(__name__)

# GitHub caps connection pages at 100 nodes; larger PRs are sized on their first 100 files
MAX_PAGE_SIZE = 100

REVIEW_BOARD_QUERY = """
query($organization: String!, $projectNumber: Int!, $id: ID!, $first: Int!) {
    organization(login: $organization) {
        projectV2(number: $projectNumber) {
            id
            fields(first: $first) {
                nodes {
                    ... on ProjectV2Field {
                        id
                        name
                    }
                    ... on ProjectV2SingleSelectField {
                        id
                        name
                        options {
                            id
                            name
                        }
                    }
                }
            }
        }
    }
    item: node(id: $id) {
        __typename
        ... on PullRequest {
            files(first: $first) {
                nodes {
                    additions
                    deletions
                    path
                }
            }
        }
    }
}
"""

CONTRIBUTIONS_QUERY = """
query($author: String!) {
    user(login: $author) {
        contributionsCollection {
            pullRequestContributionsByRepository {
                contributions {
                    totalCount
                }
                repository {
                    nameWithOwner
                }
            }
            issueContributionsByRepository {
                contributions {
                    totalCount
                }
                repository {
                    nameWithOwner
                }
            }
        }
    }
}
"""


def parse_target_item(node: dict | None, node_id: str) -> TargetItem:
    """Parse the `item` node of the review board query.

    Raises:
        ValueError: If the node does not exist or is neither a PR nor an issue
    """
    if not node:
        raise ValueError(f"No item found with node ID {node_id}")

    typename = node.get("__typename")
    if typename == "PullRequest":
        files = tuple(
            ChangedFile(
                path=f["path"],
                additions=f["additions"],
                deletions=f["deletions"],
            )
            for f in node["files"]["nodes"]
        )
        return PullRequestItem(node_id=node_id, files=files)
    if typename == "Issue":
        return IssueItem(node_id=node_id)

    raise ValueError(f"Item {node_id} is a {typename}, expected a PullRequest or Issue")


class GitHubClient:
    """Client for the GitHub GraphQL API."""

    GRAPHQL_URL = "https://api.github.com/graphql"

    def __init__(self, token: str):
        """Initialize client with a GitHub token.

        The token comes from ReviewConfig (TOKEN or GITHUB_TOKEN).

        If DOCS_REVIEW_LOG_API is set, requests and responses are captured
        to disk (see docs_review.board.api_logging).
        """
        self.token = token
        self._client = create_logging_client(
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/vnd.github+json",
            },
            timeout=30.0,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def graphql(self, query: str, variables: dict | None = None) -> dict:
        """Execute a GraphQL query.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            RuntimeError: If the response carries GraphQL errors
        """
        resp = self._client.post(
            self.GRAPHQL_URL,
            json={"query": query, "variables": variables or {}},
        )
        resp.raise_for_status()
        data = resp.json()

        if "errors" in data:
            error_msgs = [e.get("message", str(e)) for e in data["errors"]]
            raise RuntimeError(f"GraphQL errors: {error_msgs}")

        return data["data"]

    # Board reads

    def get_review_board(
        self, organization: str, project_number: int, item_id: str
    ) -> tuple[BoardSchema, TargetItem]:
        """Fetch the board's field definitions and the item being filed.

        Args:
            organization: Login of the organization owning the project
            project_number: Project number within the organization
            item_id: GraphQL node ID of the issue or PR

        Returns:
            Tuple of (board schema, target item)
        """
        data = self.graphql(
            REVIEW_BOARD_QUERY,
            {
                "organization": organization,
                "projectNumber": project_number,
                "id": item_id,
                "first": MAX_PAGE_SIZE,
            },
        )

        org = data.get("organization") or {}
        project = org.get("projectV2")
        if not project:
            raise ValueError(f"Project #{project_number} not found for organization {organization}")

        schema = parse_board_schema(project)
        item = parse_target_item(data.get("item"), item_id)
        logger.debug(
            "Fetched %d fields for project %s; item is a %s",
            len(schema.fields),
            schema.project_id,
            type(item).__name__,
        )
        return schema, item

    def get_contributions(self, login: str) -> dict:
        """Get a user's contributionsCollection grouped by repository."""
        data = self.graphql(CONTRIBUTIONS_QUERY, {"author": login})
        user = data.get("user")
        if not user:
            raise ValueError(f"User not found: {login}")
        return user["contributionsCollection"]

    # Membership

    def is_team_member(self, organization: str, team_slug: str, login: str) -> bool:
        """Check whether `login` belongs to a team in the organization."""
        query = """
        query($organization: String!, $team: String!, $login: String!) {
            organization(login: $organization) {
                team(slug: $team) {
                    members(query: $login, first: 100) {
                        nodes {
                            login
                        }
                    }
                }
            }
        }
        """
        data = self.graphql(
            query, {"organization": organization, "team": team_slug, "login": login}
        )
        team = (data.get("organization") or {}).get("team")
        if not team:
            raise ValueError(f"Team {organization}/{team_slug} not found")

        # The members search is a prefix match, so look for the exact login
        members = {m["login"].lower() for m in team["members"]["nodes"]}
        return login.lower() in members

    def is_org_member(self, organization: str, login: str) -> bool:
        """Check whether `login` is a visible member of the organization."""
        query = """
        query($login: String!, $organization: String!) {
            user(login: $login) {
                organization(login: $organization) {
                    id
                }
            }
        }
        """
        data = self.graphql(query, {"login": login, "organization": organization})
        user = data.get("user")
        return bool(user and user.get("organization"))

    # Board writes

    def add_item_to_project(self, project_id: str, content_id: str) -> str:
        """Add an issue or PR to a project.

        Args:
            project_id: GraphQL ID of the project
            content_id: GraphQL node ID of the issue or PR

        Returns:
            Project item ID
        """
        mutation = """
        mutation($projectId: ID!, $contentId: ID!) {
            addProjectV2ItemById(input: {
                projectId: $projectId
                contentId: $contentId
            }) {
                item {
                    id
                }
            }
        }
        """
        data = self.graphql(mutation, {"projectId": project_id, "contentId": content_id})
        return data["addProjectV2ItemById"]["item"]["id"]

    def update_item_fields(
        self, project_id: str, item_id: str, updates: list[FieldUpdate]
    ) -> None:
        """Set several field values on a project item in one request.

        There is no partial-success handling: if this fails the item stays
        on the board with its fields unset.
        """
        mutation, variables = build_update_mutation(project_id, item_id, updates)
        self.graphql(mutation, variables)
