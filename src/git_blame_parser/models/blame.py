"""Blame record model for a single line of ``git blame`` output."""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, Field, computed_field

UNCOMMITTED_SHA = "0" * 40
SHORT_COMMIT_LENGTH = 7

_TZ_OFFSET = re.compile(r"^([+-])(\d{2})(\d{2})$")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def tz_from_offset(offset: str) -> timezone:
    """Convert a git ``+HHMM`` offset string into a ``timezone``, UTC if malformed."""
    match = _TZ_OFFSET.match(offset)
    if not match:
        return timezone.utc
    sign, hours, minutes = match.groups()
    if int(hours) >= 24 or int(minutes) >= 60:
        return timezone.utc
    delta = timedelta(hours=int(hours), minutes=int(minutes))
    return timezone(-delta if sign == "-" else delta)


def datetime_from_git(seconds: int, offset: str) -> datetime:
    """Build an aware datetime from git epoch seconds and offset.

    Times outside the range ``datetime`` can represent fall back to the epoch.
    """
    tz = tz_from_offset(offset)
    try:
        return (_EPOCH + timedelta(seconds=seconds)).astimezone(tz)
    except OverflowError:
        return _EPOCH.astimezone(tz)


class PreviousCommit(BaseModel):
    """The commit and path this line had before the blamed commit touched it."""

    commit: str
    filepath: str

    model_config = {"frozen": True}


class Blame(BaseModel):
    """Represents the blame information of one source line.

    Built from ``git blame --line-porcelain`` output, which repeats the full
    commit information for every line. ``author_time`` and ``committer_time``
    are UNIX times in seconds. ``boundary`` is only true when git marked the
    commit as the point where history tracing stopped.
    """

    commit: str = Field(min_length=1)
    original_line_no: int = 0
    final_line_no: int = 0

    filename: str = ""
    summary: str = ""

    # The contents of the actual line
    content: str = ""

    previous: Optional[PreviousCommit] = None
    boundary: bool = False

    author: str = ""
    author_mail: str = ""
    author_time: int = 0
    author_tz: str = ""

    committer: str = ""
    committer_mail: str = ""
    committer_time: int = 0
    committer_tz: str = ""

    model_config = {"frozen": True}

    @computed_field
    @property
    def short_commit(self) -> str:
        """Get the abbreviated commit hash."""
        return self.commit[:SHORT_COMMIT_LENGTH]

    @property
    def previous_commit(self) -> Optional[str]:
        """Get the commit this line came from, if any."""
        return self.previous.commit if self.previous else None

    @property
    def previous_filepath(self) -> Optional[str]:
        """Get the path this line had in the previous commit, if any."""
        return self.previous.filepath if self.previous else None

    @property
    def is_committed(self) -> bool:
        """Check if the line belongs to a real commit rather than the working tree."""
        return self.commit != UNCOMMITTED_SHA

    @property
    def author_datetime(self) -> datetime:
        """Get the author time in the author's timezone."""
        return datetime_from_git(self.author_time, self.author_tz)

    @property
    def committer_datetime(self) -> datetime:
        """Get the committer time in the committer's timezone."""
        return datetime_from_git(self.committer_time, self.committer_tz)
