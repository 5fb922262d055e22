"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest
from git import Actor, Repo

AUTHOR = Actor("Test User", "test@example.com")

# Days since the last commit of each merged branch
MERGED_BRANCH_AGES = {
    "feature-a": 5,
    "feature-b": 40,
    "old-hotfix": 120,
}


def git_date(days_ago: int) -> str:
    """Commit date in git's internal ``<timestamp> <offset>`` format."""
    moment = datetime.now(timezone.utc) - timedelta(days=days_ago)
    return f"{int(moment.timestamp())} +0000"


def commit_file(repo: Repo, path: Path, name: str, content: str, days_ago: int = 0) -> None:
    """Write a file and commit it with a back-dated author and committer date."""
    (path / name).write_text(content)
    repo.index.add([name])
    date = git_date(days_ago)
    repo.index.commit(
        f"Add {name}",
        author=AUTHOR,
        committer=AUTHOR,
        author_date=date,
        commit_date=date,
    )


@pytest.fixture
def repo_path(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a repository with merged branches of different ages.

    Layout:
        main        current branch
        feature-a   merged, last commit 5 days ago
        feature-b   merged, last commit 40 days ago
        old-hotfix  merged, last commit 120 days ago
        wip         not merged
    """
    local_path = tmp_path / "local"
    local_path.mkdir()

    repo = Repo.init(local_path, initial_branch="main")
    with repo.config_writer() as config:
        config.set_value("user", "name", AUTHOR.name)
        config.set_value("user", "email", AUTHOR.email)

    commit_file(repo, local_path, "README.md", "# Test Repository", days_ago=200)
    main_branch = repo.heads.main

    for name, days_ago in MERGED_BRANCH_AGES.items():
        main_branch.checkout()
        branch = repo.create_head(name)
        branch.checkout()
        commit_file(repo, local_path, f"{name}.txt", f"{name} content", days_ago=days_ago)
        main_branch.checkout()
        repo.git.merge(name, "--no-ff", "--no-edit")

    wip = repo.create_head("wip")
    wip.checkout()
    commit_file(repo, local_path, "wip.txt", "work in progress")

    main_branch.checkout()

    yield local_path

    # Cleanup is handled by pytest's tmp_path fixture


@pytest.fixture
def not_a_repo(tmp_path: Path) -> Path:
    """A plain directory outside any repository."""
    path = tmp_path / "plain"
    path.mkdir()
    return path


@pytest.fixture
def tagged_repo_path(repo_path: Path) -> Path:
    """Repository where tags share names with branches.

    Adds a merged ``develop`` branch with a ``develop`` tag, and an
    ``old-hotfix`` tag on the newest commit of main.
    """
    repo = Repo(repo_path)
    repo.create_head("develop")
    repo.create_tag("develop")
    repo.create_tag("old-hotfix", ref="main")
    return repo_path
