"""Shared fixtures for board tests."""

from unittest.mock import MagicMock

import httpx
import pytest

from docs_review.board.models import BoardSchema
from docs_review.board.schema import parse_board_schema
from docs_review.config import ReviewConfig, ReviewSettings

from .fixtures import load_fixture


class MockResponse:
    """Mock httpx.Response."""

    def __init__(self, json_data: dict, status_code: int = 200):
        self._json_data = json_data
        self.status_code = status_code

    def json(self) -> dict:
        return self._json_data

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                f"HTTP {self.status_code}",
                request=MagicMock(),
                response=self,
            )


@pytest.fixture
def board_response() -> dict:
    """Review board query response for a small docs PR."""
    return load_fixture("review_board_pr_response")


@pytest.fixture
def board_schema(board_response) -> BoardSchema:
    return parse_board_schema(board_response["data"]["organization"]["projectV2"])


def make_config(repo: str = "github/docs-internal", **settings) -> ReviewConfig:
    return ReviewConfig(
        item_node_id="PR_kwDOnode",
        organization="github",
        project_number=2936,
        token="test-token",
        repo=repo,
        author_login="octocat",
        settings=ReviewSettings(**settings),
    )


@pytest.fixture
def review_config() -> ReviewConfig:
    """Config for an item from a private repo."""
    return make_config()


@pytest.fixture
def open_source_config() -> ReviewConfig:
    """Config for an item from the open source repo."""
    return make_config(repo="github/docs")
