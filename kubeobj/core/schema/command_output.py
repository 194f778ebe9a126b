"""Result of one external command invocation."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class CommandOutput:
    """Captured output of a finished process.

    Attributes:
        command: The argv that was executed
        returncode: Process exit code (None if unknown)
        stdout: Standard output as text
        stderr: Standard error as text
    """

    command: List[str] = field(default_factory=list)
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""

    @property
    def is_exit_success(self) -> bool:
        return self.returncode == 0

    def stdout_lines(self, remove_last_line_if_empty: bool = True) -> List[str]:
        """Split stdout into lines, ``\\r\\n`` normalized to ``\\n``."""
        if not self.stdout:
            return []

        lines = self.stdout.replace("\r\n", "\n").split("\n")
        if remove_last_line_if_empty and len(lines) > 1 and lines[-1] == "":
            lines = lines[:-1]
        return lines
