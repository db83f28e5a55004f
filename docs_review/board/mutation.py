"""Generate a combined field update mutation for a project item.

GitHub only sets one field per `updateProjectV2ItemFieldValue` call, so the
updates are sent as aliased calls in a single mutation document. All values
travel as GraphQL variables; nothing user-supplied is interpolated into the
document.
"""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum


class ValueKind(Enum):
    """Key of ProjectV2FieldValue to set, with its GraphQL variable type."""

    SINGLE_SELECT = ("singleSelectOptionId", "String!")
    DATE = ("date", "Date!")
    TEXT = ("text", "String!")

    @property
    def input_key(self) -> str:
        return self.value[0]

    @property
    def graphql_type(self) -> str:
        return self.value[1]


@dataclass
class FieldUpdate:
    """One field assignment within the combined mutation."""

    alias: str  # GraphQL alias, also the prefix of this update's variables
    field_id: str
    kind: ValueKind
    value: str | float | date

    @property
    def variable_value(self) -> str | float:
        if isinstance(self.value, date):
            return self.value.isoformat()
        return self.value


_ALIAS_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def build_update_mutation(
    project_id: str, item_id: str, updates: list[FieldUpdate]
) -> tuple[str, dict]:
    """Build the mutation document and its variables.

    Args:
        project_id: GraphQL ID of the project
        item_id: GraphQL ID of the project item
        updates: Field assignments, each with a unique alias

    Returns:
        Tuple of (mutation document, variables)

    Raises:
        ValueError: If there are no updates, or an alias is invalid or repeated
    """
    if not updates:
        raise ValueError("No field updates given")

    declarations = ["$project: ID!", "$item: ID!"]
    variables: dict = {"project": project_id, "item": item_id}
    calls = []
    seen: set[str] = set()

    for update in updates:
        if not _ALIAS_RE.match(update.alias):
            raise ValueError(f"Invalid alias: {update.alias!r}")
        if update.alias in seen:
            raise ValueError(f"Duplicate alias: {update.alias}")
        seen.add(update.alias)

        field_var = f"{update.alias}Field"
        value_var = f"{update.alias}Value"
        declarations.append(f"${field_var}: ID!")
        declarations.append(f"${value_var}: {update.kind.graphql_type}")
        variables[field_var] = update.field_id
        variables[value_var] = update.variable_value

        calls.append(
            f"""
    {update.alias}: updateProjectV2ItemFieldValue(input: {{
        projectId: $project
        itemId: $item
        fieldId: ${field_var}
        value: {{ {update.kind.input_key}: ${value_var} }}
    }}) {{
        projectV2Item {{
            id
        }}
    }}"""
        )

    mutation = f"mutation({', '.join(declarations)}) {{{''.join(calls)}\n}}\n"
    return mutation, variables
