"""Tests for the CLI entry point."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from docs_review.__main__ import main

from .board.conftest import MockResponse
from .board.fixtures import load_fixture

ENV = {
    "ITEM_NODE_ID": "PR_kwDOnode",
    "ORGANIZATION": "github",
    "PROJECT_NUMBER": "2936",
    "TOKEN": "ghp_test",
    "REPO": "github/docs-internal",
    "AUTHOR_LOGIN": "octocat",
}


@pytest.fixture
def run_env(tmp_path, monkeypatch):
    """Run from an empty directory with the review variables set."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DOCS_REVIEW_CONFIG", raising=False)
    monkeypatch.delenv("DOCS_REVIEW_LOG_API", raising=False)
    for key, value in ENV.items():
        monkeypatch.setenv(key, value)
    # Stop python-dotenv from picking up a developer's .env
    monkeypatch.setattr("docs_review.__main__.load_dotenv", lambda: False)


def graphql_responses(*responses: dict):
    """Patch httpx.Client.post to answer GraphQL calls in order."""
    queue = [MockResponse(r) for r in responses]
    return patch.object(httpx.Client, "post", side_effect=queue)


def membership(team: bool, org: bool) -> list[dict]:
    team_nodes = [{"login": "octocat"}] if team else []
    responses = [{"data": {"organization": {"team": {"members": {"nodes": team_nodes}}}}}]
    if not team:
        org_node = {"id": "O_github"} if org else None
        responses.append({"data": {"user": {"organization": org_node}}})
    return responses


class TestMainHelp:
    """Tests for CLI help and version output."""

    def test_help_returns_zero(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
        assert "ITEM_NODE_ID" in capsys.readouterr().out

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("docs-review ")


class TestMainRun:
    """Tests for a full run with mocked GraphQL responses."""

    def test_success(self, run_env, capsys) -> None:  # noqa: ARG002
        responses = [
            load_fixture("review_board_pr_response"),
            *membership(team=False, org=True),
            {"data": {"addProjectV2ItemById": {"item": {"id": "PVTI_new"}}}},
            {"data": {}},
        ]

        with graphql_responses(*responses) as mock_post:
            assert main([]) == 0

        assert mock_post.call_count == 5
        update = mock_post.call_args_list[-1].kwargs["json"]
        assert update["variables"]["item"] == "PVTI_new"
        assert update["variables"]["sizeValue"] == "OPT_xs"
        assert "#ERROR#" not in capsys.readouterr().out

    def test_success_is_quiet_by_default(self, run_env, monkeypatch, capsys) -> None:  # noqa: ARG002
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        responses = [
            load_fixture("review_board_pr_response"),
            *membership(team=False, org=True),
            {"data": {"addProjectV2ItemById": {"item": {"id": "PVTI_new"}}}},
            {"data": {}},
        ]

        with graphql_responses(*responses):
            assert main([]) == 0

        out = capsys.readouterr().out
        assert "PVTI_new" not in out
        assert out == ""

    def test_dry_run_does_not_write(self, run_env, capsys) -> None:  # noqa: ARG002
        responses = [load_fixture("review_board_pr_response"), *membership(team=True, org=False)]

        with graphql_responses(*responses) as mock_post:
            assert main(["--dry-run"]) == 0

        assert mock_post.call_count == 2
        out = capsys.readouterr().out
        assert "Docs team" in out
        assert "actions" in out
        assert "Dry run" in out

    def test_missing_field_exits_non_zero(self, run_env, capsys) -> None:  # noqa: ARG002
        board = load_fixture("review_board_pr_response")
        fields = board["data"]["organization"]["projectV2"]["fields"]["nodes"]
        board["data"]["organization"]["projectV2"]["fields"]["nodes"] = [
            f for f in fields if f.get("name") != "Review due date"
        ]

        with graphql_responses(board, *membership(team=False, org=True)) as mock_post:
            assert main([]) == 1

        # Nothing was added to the board
        assert mock_post.call_count == 1
        out = capsys.readouterr().out
        assert out.startswith("#ERROR# A field called 'Review due date' was not found")
        assert len(out.strip().splitlines()) == 1

    def test_missing_environment(self, run_env, monkeypatch, capsys) -> None:  # noqa: ARG002
        monkeypatch.delenv("ITEM_NODE_ID")
        assert main([]) == 1
        assert "#ERROR# Missing required environment variables: ITEM_NODE_ID" in (
            capsys.readouterr().out
        )

    def test_graphql_error(self, run_env, capsys) -> None:  # noqa: ARG002
        error = {"data": None, "errors": [{"message": "Resource not accessible by integration"}]}

        with graphql_responses(error):
            assert main([]) == 1

        assert "Resource not accessible by integration" in capsys.readouterr().out

    def test_missing_config_file(self, run_env, tmp_path, capsys) -> None:  # noqa: ARG002
        assert main(["--config", str(tmp_path / "missing.toml")]) == 1
        assert "#ERROR# Config file not found" in capsys.readouterr().out
