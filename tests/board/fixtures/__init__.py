"""Recorded GraphQL responses for board tests.

Captured with DOCS_REVIEW_LOG_API=1 and trimmed to the fields the queries ask for.
"""

import copy
import json
from functools import cache
from pathlib import Path

FIXTURES_DIR = Path(__file__).parent


@cache
def _read(name: str) -> dict:
    return json.loads((FIXTURES_DIR / f"{name}.json").read_text())


def load_fixture(name: str) -> dict:
    """Load a JSON fixture file. Each call returns a fresh copy."""
    return copy.deepcopy(_read(name))
