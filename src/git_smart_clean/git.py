"""Git repository operations."""

from datetime import datetime
from pathlib import Path

from git import Repo
from git.exc import GitError as GitLibraryError
from loguru import logger

HEADS_PREFIX = "refs/heads/"


class GitError(Exception):
    """Git operation error."""


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Initialize repository.

        Args:
            path: Path inside the working tree. Parent directories are searched.

        Raises:
            GitError: If the path is not a git repository or the repository is bare
        """
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
        except (ValueError, GitLibraryError) as err:
            raise GitError(f"Not a git repository: {path}") from err
        if self.repo.bare:
            raise GitError("Cannot operate on bare repository")

    @staticmethod
    def is_repository(path: Path) -> bool:
        """Check whether the path is inside a non-bare git repository."""
        try:
            GitRepo(path)
        except GitError:
            return False
        return True

    def current_branch(self) -> str:
        """Get current branch name."""
        try:
            try:
                return self.repo.active_branch.name
            except TypeError:
                # Detached HEAD has no branch to protect
                return ""
        except (GitLibraryError, ValueError) as err:
            raise GitError(f"Failed to get current branch: {err}") from err

    def merged_branches(self) -> list[str]:
        """List local branches merged into the current HEAD.

        Names are taken with ``lstrip=2`` rather than ``short`` so a tag sharing
        a branch's name never turns the branch into ``heads/<name>``.
        """
        try:
            # --merged takes an optional commit, so it has to come last
            output = self.repo.git.branch("--format=%(refname:lstrip=2)", "--merged")
        except GitLibraryError as err:
            raise GitError(f"Failed to list merged branches: {err}") from err

        branches = []
        for line in output.splitlines():
            name = line.strip()
            # Skip "(HEAD detached at ...)" placeholders
            if not name or name.startswith("("):
                continue
            branches.append(name)
        logger.debug(f"Found {len(branches)} merged branches")
        return branches

    def last_commit_date(self, branch_name: str) -> datetime:
        """Get the committer date of the last commit on a branch.

        Raises:
            GitError: If the branch cannot be resolved
        """
        try:
            stamp = self.repo.git.log("-1", "--format=%cI", f"{HEADS_PREFIX}{branch_name}", "--").strip()
        except GitLibraryError as err:
            raise GitError(f"Failed to read last commit of {branch_name}: {err}") from err
        if not stamp:
            raise GitError(f"Branch {branch_name} has no commits")
        try:
            return datetime.fromisoformat(stamp)
        except ValueError as err:
            raise GitError(f"Unexpected commit date for {branch_name}: {stamp}") from err

    def delete_local_branch(self, branch_name: str, force: bool = False) -> None:
        """Delete a local branch.

        Args:
            branch_name: Branch to delete
            force: Delete even when the branch is not fully merged

        Raises:
            GitError: If git refuses to delete the branch
        """
        try:
            self.repo.git.branch("-D" if force else "-d", branch_name)
        except GitLibraryError as err:
            stderr = getattr(err, "stderr", "")
            message = stderr.strip() if stderr else str(err)
            raise GitError(message.removeprefix("stderr: ").strip("'").strip()) from err
        logger.debug(f"Deleted local branch {branch_name} (force={force})")
