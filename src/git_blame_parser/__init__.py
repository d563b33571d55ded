"""Parse ``git blame --line-porcelain`` output into Blame records."""

from git_blame_parser.core.parser import (
    FIELD_SETTERS,
    BlameParseError,
    parse,
    parse_one_blame,
    parse_or_default,
)
from git_blame_parser.core.runner import BlameCommandError, blame, blame_file
from git_blame_parser.models import UNCOMMITTED_SHA, Blame, PreviousCommit

__all__ = [
    "Blame",
    "BlameCommandError",
    "BlameParseError",
    "FIELD_SETTERS",
    "PreviousCommit",
    "UNCOMMITTED_SHA",
    "blame",
    "blame_file",
    "parse",
    "parse_one_blame",
    "parse_or_default",
]
