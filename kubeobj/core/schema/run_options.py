"""Options describing one command to run."""

import shlex
from dataclasses import dataclass, field
from typing import List, Optional

from kubeobj.core.errors import InvalidInputError


@dataclass(frozen=True)
class RunCommandOptions:
    """Command plus its execution parameters.

    Attributes:
        command: argv, first element is the executable
        stdin_string: Text written to the process' stdin (None to leave it closed)
        allow_all_exit_codes: Return the output instead of raising on non-zero exit
        timeout_seconds: Overrides the context timeout for this command
    """

    command: List[str] = field(default_factory=list)
    stdin_string: Optional[str] = None
    allow_all_exit_codes: bool = False
    timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.command:
            raise InvalidInputError("command not set")

    @property
    def joined_command(self) -> str:
        """Shell-quoted command line, for log and error messages."""
        return " ".join(shlex.quote(part) for part in self.command)
