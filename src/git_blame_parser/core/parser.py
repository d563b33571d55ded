r"""Parser for ``git blame --line-porcelain`` output.

The line porcelain format emits one blob per source line::

    <sha> <original-line> <final-line> [<lines-in-group>]
    author <name>
    author-mail <<email>>
    ...
    \t<line content>

Every blob ends with the content line, which is the only line starting with
a tab. The compact ``--porcelain`` format, which omits commit information
already seen, is not supported.
"""

import logging
from typing import Any, Callable, Dict, List, Sequence

from git_blame_parser.models.blame import Blame, PreviousCommit

logger = logging.getLogger(__name__)

CONTENT_MARKER = "\t"
BOUNDARY_KEYWORD = "boundary"

Fields = Dict[str, Any]
FieldSetter = Callable[[Fields, str], None]


class BlameParseError(ValueError):
    """Raised when a blob of porcelain output cannot be turned into a Blame."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"Error parsing git-blame: {self.reason}"


def parse_or_default(value: str, default: int = 0) -> int:
    """Parse an unsigned integer, returning ``default`` for anything else.

    A single leading ``+`` is accepted. A minus sign, blanks or any other
    character yield the default.
    """
    digits = value[1:] if value.startswith("+") else value
    if digits.isascii() and digits.isdigit():
        return int(digits)
    return default


def _set_text(name: str) -> FieldSetter:
    def setter(fields: Fields, value: str) -> None:
        fields[name] = value

    return setter


def _set_time(name: str) -> FieldSetter:
    def setter(fields: Fields, value: str) -> None:
        fields[name] = parse_or_default(value)

    return setter


def _set_previous(fields: Fields, value: str) -> None:
    commit, sep, filepath = value.partition(" ")
    if sep:
        fields["previous"] = PreviousCommit(commit=commit, filepath=filepath)


FIELD_SETTERS: Dict[str, FieldSetter] = {
    "filename": _set_text("filename"),
    "summary": _set_text("summary"),
    "author": _set_text("author"),
    "author-mail": _set_text("author_mail"),
    "author-time": _set_time("author_time"),
    "author-tz": _set_text("author_tz"),
    "committer": _set_text("committer"),
    "committer-mail": _set_text("committer_mail"),
    "committer-time": _set_time("committer_time"),
    "committer-tz": _set_text("committer_tz"),
    "previous": _set_previous,
}


def parse_one_blame(porcelain: Sequence[str]) -> Blame:
    """Build a Blame from the porcelain lines describing a single source line."""
    if not porcelain or porcelain[0].startswith(CONTENT_MARKER):
        raise BlameParseError("no header")

    header = porcelain[0].split()
    if not header:
        raise BlameParseError("no header")

    fields: Fields = {"commit": header[0]}
    if len(header) > 1:
        fields["original_line_no"] = parse_or_default(header[1])
    if len(header) > 2:
        fields["final_line_no"] = parse_or_default(header[2])

    for line in porcelain[1:]:
        if line.startswith(CONTENT_MARKER):
            fields["content"] = line[len(CONTENT_MARKER):]
            continue

        key, sep, value = line.partition(" ")
        if not sep:
            if line == BOUNDARY_KEYWORD:
                fields["boundary"] = True
            continue

        # Tolerate "key: value" spellings
        if key.endswith(":"):
            key = key[:-1]
        setter = FIELD_SETTERS.get(key)
        if setter is not None:
            setter(fields, value)

    return Blame(**fields)


def _split_lines(porcelain: str) -> List[str]:
    """Split on newlines only, dropping a CR only where it precedes a newline."""
    lines = porcelain.split("\n")
    # Text after the last newline, empty when the input ends with one
    tail = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if tail:
        lines.append(tail)
    return lines


def parse(porcelain: str) -> List[Blame]:
    """Parse ``git blame --line-porcelain`` output into one Blame per line.

    Raises BlameParseError on the first malformed blob; no partial result is
    returned in that case.
    """
    blames: List[Blame] = []
    blob: List[str] = []

    for line in _split_lines(porcelain):
        blob.append(line)

        # end of one blame output
        if line.startswith(CONTENT_MARKER):
            blames.append(parse_one_blame(blob))
            blob = []

    if blob:
        logger.warning(
            "Discarding %d trailing line(s) without a content line", len(blob)
        )

    logger.debug("Parsed %d blame record(s)", len(blames))
    return blames
