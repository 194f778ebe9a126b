"""Command executor running processes on the local host."""

import logging
import os
import subprocess
from typing import Optional

from kubeobj.core.errors import (
    CommandExecutionBlockedError,
    CommandFailedError,
    CommandTimeoutError,
)
from kubeobj.core.log import log_info_by_ctx
from kubeobj.core.schema import CommandOutput, ExecutionContext, RunCommandOptions

logger = logging.getLogger(__name__)

# Setting this environment variable to "1" refuses every process start
AVOID_EXEC_ENV_VAR = "KUBEOBJ_AVOID_EXEC"


class ExecCommandExecutor:
    """Runs commands with :func:`subprocess.run` and captures their output.

    Attributes:
        default_timeout_seconds: Timeout used when neither the options nor the
            context set one (None for no limit)
    """

    def __init__(self, default_timeout_seconds: Optional[float] = None) -> None:
        self.default_timeout_seconds = default_timeout_seconds

    def _timeout(self, options: RunCommandOptions, ctx: Optional[ExecutionContext]) -> Optional[float]:
        if options.timeout_seconds is not None:
            return options.timeout_seconds
        if ctx is not None and ctx.timeout_seconds is not None:
            return ctx.timeout_seconds
        return self.default_timeout_seconds

    def run_command(self, options: RunCommandOptions, ctx: Optional[ExecutionContext] = None) -> CommandOutput:
        """Run a command to completion.

        Args:
            options: Command, stdin and exit code handling
            ctx: Execution context (verbosity, timeout)

        Returns:
            CommandOutput with return code, stdout and stderr

        Raises:
            CommandExecutionBlockedError: If KUBEOBJ_AVOID_EXEC=1
            CommandTimeoutError: If the command did not finish in time
            CommandFailedError: On non-zero exit, unless all exit codes are allowed
        """
        joined = options.joined_command

        if os.environ.get(AVOID_EXEC_ENV_VAR) == "1":
            raise CommandExecutionBlockedError(
                f"env var '{AVOID_EXEC_ENV_VAR}' is set to '1'. The command exec is therefore blocked. "
                f"The blocked command is '{joined}'"
            )

        timeout = self._timeout(options, ctx)
        log_info_by_ctx(logger, ctx, "Run command: %s", joined)

        try:
            result = subprocess.run(
                options.command,
                input=options.stdin_string,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(
                f"Command timed out after {timeout} seconds: '{joined}'",
                command=options.command,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr),
            ) from e
        except FileNotFoundError as e:
            raise CommandFailedError(
                f"Command failed: '{joined}', executable not found",
                command=options.command,
                returncode=127,
                stderr=str(e),
            ) from e

        output = CommandOutput(
            command=list(options.command),
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

        if not output.is_exit_success:
            if options.allow_all_exit_codes:
                log_info_by_ctx(
                    logger,
                    ctx,
                    "Command '%s' has exit code '%d' != 0 but all exit codes are allowed.",
                    joined,
                    result.returncode,
                )
            else:
                raise CommandFailedError(
                    f"Command failed: '{joined}', exit code {result.returncode}\n{result.stderr}",
                    command=options.command,
                    returncode=result.returncode,
                    stdout=result.stdout,
                    stderr=result.stderr,
                )

        return output


def _as_text(data: Optional[object]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return str(data)
