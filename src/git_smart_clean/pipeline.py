"""Merged-branch selection: exclusion, enrichment, ordering and age filtering."""

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from loguru import logger

from git_smart_clean.age import AgeBand, classify
from git_smart_clean.git import GitError

REMOTE_PREFIX = "remotes/origin/"
UNKNOWN_AGE = "unknown"


@dataclass(frozen=True)
class BranchCandidate:
    """A merged branch eligible for deletion."""

    name: str
    last_commit: datetime
    age_label: str
    age_band: AgeBand

    @property
    def age_known(self) -> bool:
        return self.age_label != UNKNOWN_AGE


class SelectionStatus(Enum):
    """Outcome of a selection run."""

    READY = "ready"
    NO_BRANCHES_ELIGIBLE = "no_branches_eligible"
    NO_BRANCHES_OLDER_THAN_THRESHOLD = "no_branches_older_than_threshold"


@dataclass(frozen=True)
class Selection:
    """Ordered candidates plus how the run ended.

    Attributes:
        candidates: Oldest first
        status: Why the run ended, empty outcomes are not errors
        filtered_count: Candidates dropped by the age threshold
    """

    candidates: tuple[BranchCandidate, ...] = ()
    status: SelectionStatus = SelectionStatus.READY
    filtered_count: int = 0


def normalize_branch_name(name: str) -> str:
    """Strip the remote-tracking prefix and surrounding whitespace."""
    name = name.strip()
    if name.startswith(REMOTE_PREFIX):
        name = name[len(REMOTE_PREFIX) :]
    return name.strip()


def build_exclusion_set(exclude: Iterable[str], current_branch: str) -> frozenset[str]:
    """Protected names plus the checked-out branch."""
    return frozenset(exclude) | {current_branch}


def _resolve(name: str, now: datetime, commit_date_of: Callable[[str], datetime]) -> BranchCandidate:
    try:
        last_commit = commit_date_of(name)
    except GitError as err:
        logger.warning(f"Could not read last commit of {name}: {err}")
        _, band = classify(now, now)
        return BranchCandidate(name, now, UNKNOWN_AGE, band)
    label, band = classify(now, last_commit)
    return BranchCandidate(name, last_commit, label, band)


def _resolve_all(
    names: Sequence[str],
    now: datetime,
    commit_date_of: Callable[[str], datetime],
    max_workers: int,
) -> list[BranchCandidate]:
    if max_workers <= 1 or len(names) <= 1:
        return [_resolve(name, now, commit_date_of) for name in names]

    logger.debug(f"Resolving {len(names)} commit dates with {max_workers} workers")
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        # map() yields in submission order, whatever order lookups finish in
        return list(executor.map(lambda name: _resolve(name, now, commit_date_of), names))


def select_candidates(
    all_branches: Sequence[str],
    current_branch: str,
    exclude: Iterable[str],
    age_threshold_days: Optional[int],
    now: datetime,
    commit_date_of: Callable[[str], datetime],
    max_workers: int = 1,
) -> Selection:
    """Build the ordered list of branches that may be deleted.

    Args:
        all_branches: Merged branch names as reported by the backend
        current_branch: Checked-out branch, always protected
        exclude: Configured protected names
        age_threshold_days: Keep only branches strictly older than this many days
        now: Reference instant for ages and the threshold
        commit_date_of: Last-commit lookup. A ``GitError`` marks the branch unknown.
        max_workers: Parallel lookups, 1 keeps them sequential

    Returns:
        Selection with candidates sorted oldest first
    """
    excluded = build_exclusion_set(exclude, current_branch)
    eligible = [name for name in (normalize_branch_name(b) for b in all_branches) if name and name not in excluded]
    if not eligible:
        return Selection(status=SelectionStatus.NO_BRANCHES_ELIGIBLE)

    candidates = _resolve_all(eligible, now, commit_date_of, max_workers)
    # sorted() is stable, equal timestamps keep input order
    candidates = sorted(candidates, key=lambda c: c.last_commit)

    filtered_count = 0
    if age_threshold_days is not None:
        cutoff = now - timedelta(days=age_threshold_days)
        kept = [c for c in candidates if c.last_commit < cutoff]
        filtered_count = len(candidates) - len(kept)
        candidates = kept
        logger.debug(f"Age threshold {age_threshold_days}d removed {filtered_count} branches")
        if not candidates:
            return Selection(status=SelectionStatus.NO_BRANCHES_OLDER_THAN_THRESHOLD, filtered_count=filtered_count)

    return Selection(candidates=tuple(candidates), filtered_count=filtered_count)
