"""Per-run state shared by every command of one agent run."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union


@dataclass
class RunContext:
    """Working directory of a run.

    Commands resolve relative paths against ``cwd``; only a successful change
    of directory moves it. The process working directory is never touched.
    """
    cwd: Path = field(default_factory=Path.cwd)

    def __post_init__(self):
        self.cwd = Path(self.cwd).resolve()

    def resolve(self, path: Union[str, Path]) -> Path:
        """Absolute path of ``path`` relative to the run's working directory."""
        return (self.cwd / Path(path).expanduser()).resolve()


def create_run_context(cwd: Optional[Union[str, Path]] = None) -> RunContext:
    """Create a run context rooted at ``cwd`` (defaults to the process cwd)."""
    return RunContext(Path(cwd) if cwd else Path.cwd())
