"""Tests for board schema parsing and field/option lookups."""

import pytest

from docs_review.board.models import ContributorType, SizeCategory
from docs_review.board.schema import (
    FieldLookupError,
    find_field_id,
    find_single_select_id,
    parse_board_schema,
    resolve_board_ids,
)


class TestParseBoardSchema:
    """Tests for parse_board_schema()."""

    def test_reads_project_id(self, board_schema):
        assert board_schema.project_id == "PVT_kwDOAdocs"

    def test_skips_unmatched_field_nodes(self, board_schema):
        """Fields matching neither fragment come back as {} and are dropped."""
        assert len(board_schema.fields) == 8
        assert "" not in board_schema.field_names

    def test_plain_fields_have_no_options(self, board_schema):
        title = next(f for f in board_schema.fields if f.name == "Title")
        assert title.options == {}

    def test_single_select_options_are_mapped(self, board_schema):
        size = next(f for f in board_schema.fields if f.name == "Size")
        assert size.options == {"XS": "OPT_xs", "S": "OPT_s", "M": "OPT_m", "L": "OPT_l"}

    def test_null_options_treated_as_empty(self):
        schema = parse_board_schema(
            {"id": "PVT_1", "fields": {"nodes": [{"id": "F1", "name": "Notes", "options": None}]}}
        )
        assert schema.fields[0].options == {}


class TestFindFieldId:
    """Tests for find_field_id()."""

    def test_finds_field(self, board_schema):
        assert find_field_id("Date posted", board_schema) == "PVTF_date_posted"

    def test_match_is_exact(self, board_schema):
        with pytest.raises(FieldLookupError):
            find_field_id("date posted", board_schema)

    def test_missing_field_names_it(self, board_schema):
        with pytest.raises(FieldLookupError, match="'Reviewer'"):
            find_field_id("Reviewer", board_schema)

    def test_lookup_error_is_value_error(self, board_schema):
        with pytest.raises(ValueError):
            find_field_id("Reviewer", board_schema)


class TestFindSingleSelectId:
    """Tests for find_single_select_id()."""

    def test_finds_option(self, board_schema):
        assert find_single_select_id("Ready for review", "Status", board_schema) == "OPT_ready"

    def test_missing_option_lists_available(self, board_schema):
        with pytest.raises(FieldLookupError, match="Available options: XS, S, M, L"):
            find_single_select_id("XL", "Size", board_schema)

    def test_missing_field(self, board_schema):
        with pytest.raises(FieldLookupError, match="'Priority'"):
            find_single_select_id("High", "Priority", board_schema)

    def test_option_on_plain_field(self, board_schema):
        with pytest.raises(FieldLookupError, match="Available options: none"):
            find_single_select_id("actions", "Feature", board_schema)


class TestResolveBoardIds:
    """Tests for resolve_board_ids()."""

    def test_resolves_every_field(self, board_schema):
        ids = resolve_board_ids(board_schema)

        assert ids.project_id == "PVT_kwDOAdocs"
        assert ids.status_field == "PVTSSF_status"
        assert ids.date_posted_field == "PVTF_date_posted"
        assert ids.review_due_date_field == "PVTF_due"
        assert ids.feature_field == "PVTF_feature"
        assert ids.contributor_type_field == "PVTSSF_ctype"
        assert ids.size_field == "PVTSSF_size"
        assert ids.contributor_field == "PVTF_contributor"
        assert ids.ready_for_review_option == "OPT_ready"

    def test_contributor_type_options(self, board_schema):
        options = resolve_board_ids(board_schema).contributor_type_options

        assert options[ContributorType.DOCS_TEAM] == "OPT_docs"
        assert options[ContributorType.ORG_MEMBER] == "OPT_hubber"
        assert options[ContributorType.OPEN_SOURCE] == "OPT_os"
        assert options[ContributorType.FALLBACK_ORG_MEMBER] == "OPT_hubber"

    def test_size_options(self, board_schema):
        options = resolve_board_ids(board_schema).size_options
        assert options == {
            SizeCategory.XS: "OPT_xs",
            SizeCategory.S: "OPT_s",
            SizeCategory.M: "OPT_m",
            SizeCategory.L: "OPT_l",
        }

    def test_renamed_field_fails(self, board_schema):
        for f in board_schema.fields:
            if f.name == "Review due date":
                f.name = "Due"

        with pytest.raises(FieldLookupError, match="Review due date"):
            resolve_board_ids(board_schema)

    def test_missing_option_fails(self, board_schema):
        ctype = next(f for f in board_schema.fields if f.name == "Contributor type")
        del ctype.options["OS contributor"]

        with pytest.raises(FieldLookupError, match="OS contributor"):
            resolve_board_ids(board_schema)
