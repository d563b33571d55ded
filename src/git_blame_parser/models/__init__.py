"""Data models for git-blame-parser."""

from .blame import UNCOMMITTED_SHA, Blame, PreviousCommit

__all__ = ["Blame", "PreviousCommit", "UNCOMMITTED_SHA"]
