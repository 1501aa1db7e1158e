import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class SessionState:
    """Working directory, command history and time spent in child processes"""

    cwd: Path
    history: list = field(default_factory=list)
    total_ms: float = 0.0
    replay_depth: int = 0

    @classmethod
    def create(cls, cwd=None):
        """New session rooted at cwd, or at the interpreter's current directory"""
        return cls(cwd=Path(cwd) if cwd is not None else Path(os.getcwd()))

    def add_time(self, elapsed_ms):
        if elapsed_ms > 0:
            self.total_ms += elapsed_ms
