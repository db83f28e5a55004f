"""Configuration for a docs review run.

The run is described by process environment variables set by the workflow
that triggers it. Board-specific constants live in ReviewSettings and can be
overridden from a TOML file:

1. Path given with --config
2. DOCS_REVIEW_CONFIG environment variable
3. .docs-review/config.toml in the working directory
4. Defaults
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path

import tomllib

DEFAULT_CONFIG_PATH = Path(".docs-review") / "config.toml"

# Environment variable -> ReviewConfig attribute
REQUIRED_ENV = {
    "ITEM_NODE_ID": "item_node_id",
    "ORGANIZATION": "organization",
    "PROJECT_NUMBER": "project_number",
    "REPO": "repo",
    "AUTHOR_LOGIN": "author_login",
}


@dataclass
class ReviewSettings:
    """Board conventions that rarely change between runs."""

    open_source_repo: str = "github/docs"
    docs_team_slug: str = "docs"
    content_root: str = "content"
    turnaround_days: int = 2
    open_source_turnaround_days: int = 3
    first_time_label: str = "first time contributor"
    skip_weekends: bool = False


@dataclass
class ReviewConfig:
    """Everything a single run needs, read once at startup."""

    item_node_id: str
    organization: str
    project_number: int
    token: str = field(repr=False)
    repo: str
    author_login: str
    settings: ReviewSettings = field(default_factory=ReviewSettings)

    @property
    def is_open_source_repo(self) -> bool:
        return self.repo == self.settings.open_source_repo


def load_settings(path: Path | None = None) -> ReviewSettings:
    """Load ReviewSettings from the [review] section of a TOML file.

    Args:
        path: Explicit config file. When omitted, DOCS_REVIEW_CONFIG and then
            .docs-review/config.toml are tried.

    Returns:
        ReviewSettings with values from the file or defaults.

    Raises:
        FileNotFoundError: If an explicitly named file does not exist
        ValueError: If the file has keys ReviewSettings does not know, or a
            value of the wrong type
    """
    explicit = path
    if explicit is None and os.environ.get("DOCS_REVIEW_CONFIG"):
        explicit = Path(os.environ["DOCS_REVIEW_CONFIG"])
    config_path = explicit or DEFAULT_CONFIG_PATH

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return ReviewSettings()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    review_data = data.get("review", {})
    known = {f.name for f in fields(ReviewSettings)}
    unknown = sorted(set(review_data) - known)
    if unknown:
        raise ValueError(f"Unknown keys in [review] section of {config_path}: {', '.join(unknown)}")

    for f in fields(ReviewSettings):
        if f.name not in review_data:
            continue
        # Every setting has a str, int or bool default; bool is not accepted for int
        expected = type(f.default)
        value = review_data[f.name]
        if type(value) is not expected:
            raise ValueError(
                f"[review] {f.name} in {config_path} must be {expected.__name__}, got {value!r}"
            )

    return ReviewSettings(**review_data)


def load_review_config(
    environ: Mapping[str, str] | None = None,
    settings: ReviewSettings | None = None,
) -> ReviewConfig:
    """Build a ReviewConfig from environment variables.

    The token is read from TOKEN, falling back to GITHUB_TOKEN.

    Raises:
        ValueError: If a required variable is unset or PROJECT_NUMBER is not an integer
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV if not env.get(name)]
    token = env.get("TOKEN") or env.get("GITHUB_TOKEN")
    if not token:
        missing.append("TOKEN")
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    try:
        project_number = int(env["PROJECT_NUMBER"])
    except ValueError:
        raise ValueError(
            f"PROJECT_NUMBER must be an integer, got {env['PROJECT_NUMBER']!r}"
        ) from None

    return ReviewConfig(
        item_node_id=env["ITEM_NODE_ID"],
        organization=env["ORGANIZATION"],
        project_number=project_number,
        token=token,
        repo=env["REPO"],
        author_login=env["AUTHOR_LOGIN"],
        settings=settings or ReviewSettings(),
    )
