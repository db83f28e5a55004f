"""Docs review board automation.

Files a pull request or issue on the documentation review board and fills
in its Status, dates, Size, Feature, Contributor type and Contributor fields.
"""

from docs_review._version import __version__

__all__ = ["__version__"]
