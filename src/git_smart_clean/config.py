"""Run configuration built from command line options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_EXCLUDE = "main,master,develop"
DEFAULT_WORKERS = 8


def parse_exclude(raw: str) -> tuple[str, ...]:
    """Split a comma-separated branch list, trimming each entry."""
    return tuple(name.strip() for name in raw.split(",") if name.strip())


@dataclass(frozen=True)
class CleanConfig:
    """Options for one cleanup run."""

    path: Path = Path(".")
    dry_run: bool = False
    older_than: Optional[int] = None
    exclude: tuple[str, ...] = parse_exclude(DEFAULT_EXCLUDE)
    workers: int = DEFAULT_WORKERS
    interactive: bool = True
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.older_than is not None and self.older_than < 0:
            raise ValueError("older_than must be a non-negative number of days")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")

    @property
    def threshold_suffix(self) -> str:
        """`` older than N days`` when an age threshold is set."""
        return f" older than {self.older_than} days" if self.older_than is not None else ""
