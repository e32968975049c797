"""Source sync — pull the chef repository before promoting.

GitPython is optional.  Its availability is resolved once at import time
and passed to the orchestrator as a capability flag; without it the pull
degrades to a logged no-op.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Try-import GitPython
# ---------------------------------------------------------------------------

_GIT_AVAILABLE: bool = False
_git: Any = None

try:
    import git as _git  # type: ignore[import-untyped]

    _GIT_AVAILABLE = True
    logger.debug("GitPython loaded — source sync enabled.")
except ImportError:
    logger.debug("GitPython not found — source sync will be skipped.")


def is_git_available() -> bool:
    """Return ``True`` if GitPython is importable."""
    return _GIT_AVAILABLE


def git_pull_if_repo(repo_roots: list[Path], *, available: bool | None = None) -> bool:
    """Pull the latest changes into the chef repository.

    Never raises: every failure is logged as a warning and the run
    continues.  Returns ``True`` only when a pull actually happened.

    Parameters
    ----------
    repo_roots:
        Candidate repository roots, one per configured cookbook path.
        With more than one it is impossible to tell which is the repo,
        so nothing is pulled.
    available:
        Capability flag; defaults to ``is_git_available()``.
    """
    if available is None:
        available = _GIT_AVAILABLE
    if not available:
        logger.info("Git library not available, skipping git pull.")
        return False

    if len(repo_roots) != 1:
        logger.warning(
            "Multiple cookbook paths defined; can't tell if running inside a "
            "git repo. Skipping git pull."
        )
        return False

    path = repo_roots[0]
    try:
        logger.info("Opening git repo %s", path)
        repo = _git.Repo(path)
        logger.info("Pulling latest changes from git")
        repo.remotes.origin.pull()
    except (_git.InvalidGitRepositoryError, _git.NoSuchPathError):
        logger.warning(
            "Git: %s doesn't look like a git repo. Skipping git pull.", path
        )
        return False
    except (_git.GitError, AttributeError, ValueError) as exc:
        logger.warning("Git: something went wrong with git pull: %s", exc)
        return False
    return True
