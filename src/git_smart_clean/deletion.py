"""Sequential deletion of selected branches with per-branch outcomes."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from git_smart_clean.git import GitError
from git_smart_clean.pipeline import BranchCandidate


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of deleting one branch."""

    name: str
    success: bool
    message: Optional[str] = None


def delete_all(
    selected: Iterable[BranchCandidate],
    delete_one: Callable[..., None],
) -> list[DeletionOutcome]:
    """Force-delete each selected branch in order.

    A ``GitError`` for one branch is recorded and the batch continues.
    Any other exception is treated as systemic and propagates.

    Args:
        selected: Branches in presentation order
        delete_one: Backend deletion, called as ``delete_one(name, force=True)``

    Returns:
        One outcome per selected branch
    """
    outcomes = []
    for candidate in selected:
        try:
            delete_one(candidate.name, force=True)
        except GitError as err:
            logger.warning(f"Failed to delete {candidate.name}: {err}")
            outcomes.append(DeletionOutcome(candidate.name, False, str(err)))
            continue
        outcomes.append(DeletionOutcome(candidate.name, True))
    return outcomes


def summarize(outcomes: Iterable[DeletionOutcome]) -> tuple[int, int]:
    """Count (succeeded, failed) deletions."""
    succeeded = failed = 0
    for outcome in outcomes:
        if outcome.success:
            succeeded += 1
        else:
            failed += 1
    return succeeded, failed
