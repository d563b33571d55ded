"""Run ``git blame`` for a file and parse its line porcelain output."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from git import Repo
from git.exc import (
    GitCommandError,
    GitCommandNotFound,
    InvalidGitRepositoryError,
    NoSuchPathError,
)

from git_blame_parser.core.parser import parse
from git_blame_parser.models.blame import Blame

logger = logging.getLogger(__name__)


class BlameCommandError(RuntimeError):
    """Raised when git blame cannot be run for a file."""


def _open_repo(file_path: Path) -> Repo:
    try:
        repo = Repo(file_path.parent, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise BlameCommandError(f"Not a git repository: {file_path.parent}") from e

    if repo.working_tree_dir is None:
        raise BlameCommandError(f"Repository has no working tree: {repo.git_dir}")
    return repo


def blame_file(file_path: Union[str, Path], rev: Optional[str] = None) -> str:
    """Run ``git blame --line-porcelain`` on a file and return its output.

    Invalid UTF-8 in the output is replaced rather than rejected.
    """
    path = Path(file_path)
    if not path.is_file():
        raise BlameCommandError(f"Invalid file path: {file_path}")
    path = path.resolve()

    repo = _open_repo(path)
    work_tree = Path(repo.working_tree_dir).resolve()
    try:
        relative_path = path.relative_to(work_tree)
    except ValueError as e:
        repo.close()
        raise BlameCommandError(f"{path} is outside {work_tree}") from e

    args = ["--line-porcelain"]
    if rev:
        args.append(rev)
    args.extend(["--", relative_path.as_posix()])
    logger.debug("Running git blame %s in %s", " ".join(args), work_tree)

    try:
        raw = repo.git.blame(
            *args, stdout_as_string=False, strip_newline_in_stdout=False
        )
    except GitCommandNotFound as e:
        raise BlameCommandError(
            "Git command not found. Make sure git is installed."
        ) from e
    except GitCommandError as e:
        raise BlameCommandError(f"git blame failed: {e}") from e
    finally:
        repo.close()

    return raw.decode("utf-8", errors="replace")


def blame(file_path: Union[str, Path], rev: Optional[str] = None) -> List[Blame]:
    """Blame a file and return one Blame per line, in file order."""
    return parse(blame_file(file_path, rev=rev))
