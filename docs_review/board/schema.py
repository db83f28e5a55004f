"""Field and option lookups against a fetched board schema.

Lookups never touch the network. A name that cannot be found raises
FieldLookupError instead of returning a placeholder, since an unknown ID
would silently corrupt the field update mutation.
"""

from dataclasses import dataclass

from docs_review.board.models import (
    FIELD_CONTRIBUTOR,
    FIELD_CONTRIBUTOR_TYPE,
    FIELD_DATE_POSTED,
    FIELD_FEATURE,
    FIELD_REVIEW_DUE_DATE,
    FIELD_SIZE,
    FIELD_STATUS,
    STATUS_READY_FOR_REVIEW,
    BoardSchema,
    ContributorType,
    ProjectField,
    SizeCategory,
)


class FieldLookupError(ValueError):
    """A field or single-select option is missing from the board."""


def parse_board_schema(project: dict) -> BoardSchema:
    """Build a BoardSchema from a `projectV2` GraphQL node.

    Field nodes that matched neither fragment come back as empty objects
    and are skipped.
    """
    fields = []
    for node in project["fields"]["nodes"]:
        if not node or "id" not in node:
            continue
        options = {opt["name"]: opt["id"] for opt in node.get("options") or []}
        fields.append(ProjectField(id=node["id"], name=node["name"], options=options))
    return BoardSchema(project_id=project["id"], fields=fields)


def _find_field(name: str, schema: BoardSchema) -> ProjectField:
    for project_field in schema.fields:
        if project_field.name == name:
            return project_field
    raise FieldLookupError(
        f"A field called '{name}' was not found. Check if the field was renamed. "
        f"Available fields: {', '.join(schema.field_names)}"
    )


def find_field_id(name: str, schema: BoardSchema) -> str:
    """Return the ID of the field named exactly `name`."""
    return _find_field(name, schema).id


def find_single_select_id(option_name: str, field_name: str, schema: BoardSchema) -> str:
    """Return the ID of option `option_name` on single-select field `field_name`.

    Raises:
        FieldLookupError: If the field or the option does not exist
    """
    project_field = _find_field(field_name, schema)
    if option_name not in project_field.options:
        available = ", ".join(project_field.options) or "none"
        raise FieldLookupError(
            f"An option called '{option_name}' was not found for the field "
            f"'{field_name}'. Available options: {available}"
        )
    return project_field.options[option_name]


@dataclass
class BoardIds:
    """Every field and option ID the review update needs."""

    project_id: str
    status_field: str
    date_posted_field: str
    review_due_date_field: str
    feature_field: str
    contributor_type_field: str
    size_field: str
    contributor_field: str
    ready_for_review_option: str
    contributor_type_options: dict[ContributorType, str]
    size_options: dict[SizeCategory, str]


def resolve_board_ids(schema: BoardSchema) -> BoardIds:
    """Look up all field and option IDs at once.

    Called before the item is added to the board so that a renamed field
    fails the run without leaving a half-populated item behind.
    """
    contributor_type_options = {
        contributor_type: find_single_select_id(
            contributor_type.option_name, FIELD_CONTRIBUTOR_TYPE, schema
        )
        for contributor_type in ContributorType
    }
    size_options = {
        size: find_single_select_id(size.value, FIELD_SIZE, schema) for size in SizeCategory
    }

    return BoardIds(
        project_id=schema.project_id,
        status_field=find_field_id(FIELD_STATUS, schema),
        date_posted_field=find_field_id(FIELD_DATE_POSTED, schema),
        review_due_date_field=find_field_id(FIELD_REVIEW_DUE_DATE, schema),
        feature_field=find_field_id(FIELD_FEATURE, schema),
        contributor_type_field=find_field_id(FIELD_CONTRIBUTOR_TYPE, schema),
        size_field=find_field_id(FIELD_SIZE, schema),
        contributor_field=find_field_id(FIELD_CONTRIBUTOR, schema),
        ready_for_review_option=find_single_select_id(
            STATUS_READY_FOR_REVIEW, FIELD_STATUS, schema
        ),
        contributor_type_options=contributor_type_options,
        size_options=size_options,
    )
