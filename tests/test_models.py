"""Tests for the Blame model."""

from datetime import timedelta, timezone

import pytest
from pydantic import ValidationError

from git_blame_parser.models import UNCOMMITTED_SHA, Blame, PreviousCommit
from git_blame_parser.models.blame import tz_from_offset


def test_short_commit():
    """Test the abbreviated commit hash."""
    blame = Blame(commit="abcdefghijklmnopqrstuvwxyz1234567890abcd")

    assert blame.short_commit == "abcdefg"


def test_short_commit_of_short_hash():
    """Test that hashes shorter than seven characters are returned whole."""
    assert Blame(commit="abc").short_commit == "abc"
    assert Blame(commit="abcdefg").short_commit == "abcdefg"


def test_defaults():
    """Test that a bare record carries zero values."""
    blame = Blame(commit="abc123")

    assert blame.original_line_no == 0
    assert blame.final_line_no == 0
    assert blame.filename == ""
    assert blame.content == ""
    assert blame.boundary is False
    assert blame.previous is None
    assert blame.previous_commit is None
    assert blame.previous_filepath is None
    assert blame.author_time == 0
    assert blame.committer_tz == ""


def test_commit_must_not_be_empty():
    with pytest.raises(ValidationError):
        Blame(commit="")


def test_blame_is_immutable():
    """Test that records cannot be changed after parsing."""
    blame = Blame(commit="abc123")

    with pytest.raises(ValidationError):
        blame.content = "changed"


def test_previous_pair():
    blame = Blame(
        commit="abc123",
        previous=PreviousCommit(commit="def456", filepath="old name.txt"),
    )

    assert blame.previous_commit == "def456"
    assert blame.previous_filepath == "old name.txt"


def test_is_committed():
    assert Blame(commit="abc123").is_committed
    assert not Blame(commit=UNCOMMITTED_SHA).is_committed


def test_author_datetime_uses_offset():
    """Test that the git offset string becomes the datetime's timezone."""
    blame = Blame(commit="abc123", author_time=1744981061, author_tz="+0900")

    dt = blame.author_datetime
    assert dt.utcoffset() == timedelta(hours=9)
    assert dt.timestamp() == 1744981061
    assert dt.strftime("%Y-%m-%d %H:%M") == "2025-04-18 21:57"


def test_committer_datetime_negative_offset():
    blame = Blame(commit="abc123", committer_time=0, committer_tz="-0330")

    assert blame.committer_datetime.utcoffset() == -timedelta(hours=3, minutes=30)


@pytest.mark.parametrize(
    "offset", ["", "0900", "+09", "UTC", "+09:00", "+9999", "+2500", "-0960"]
)
def test_malformed_offset_falls_back_to_utc(offset):
    assert tz_from_offset(offset) == timezone.utc


def test_largest_valid_offset():
    assert tz_from_offset("+2359").utcoffset(None) == timedelta(hours=23, minutes=59)


def test_out_of_range_offset_in_datetime():
    """Test that an impossible offset still yields a UTC datetime."""
    blame = Blame(commit="abc123", author_time=60, author_tz="+2500")

    dt = blame.author_datetime
    assert dt.utcoffset() == timedelta(0)
    assert dt.timestamp() == 60


@pytest.mark.parametrize("seconds", [99999999999999999, 253402300800])
def test_unrepresentable_time_falls_back_to_epoch(seconds):
    """Test that times beyond what datetime can hold do not raise."""
    blame = Blame(
        commit="abc123",
        author_time=seconds,
        author_tz="+0900",
        committer_time=seconds,
    )

    assert blame.author_datetime.timestamp() == 0
    assert blame.author_datetime.utcoffset() == timedelta(hours=9)
    assert blame.committer_datetime.timestamp() == 0


def test_json_dump_includes_short_commit():
    """Test the JSON form used by the CLI."""
    data = Blame(commit="c9a79e91e05355fc42ec519593806466c2f66de0").model_dump(
        mode="json"
    )

    assert data["short_commit"] == "c9a79e9"
    assert data["previous"] is None
    assert data["boundary"] is False
