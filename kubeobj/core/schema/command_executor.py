"""Command execution capability consumed by the kubectl adapters."""

from typing import List, Optional, Protocol

from kubeobj.core.schema.command_output import CommandOutput
from kubeobj.core.schema.context import ExecutionContext
from kubeobj.core.schema.run_options import RunCommandOptions


class CommandExecutor(Protocol):
    """Runs a command and returns its captured output.

    Implementations raise :class:`~kubeobj.core.errors.CommandFailedError` when
    the process exits non-zero, unless ``options.allow_all_exit_codes`` is set.
    The adapters never start processes themselves, so tests can substitute an
    in-memory executor.

    Example:
        class EchoExecutor:
            def run_command(self, options, ctx=None):
                return CommandOutput(command=options.command, returncode=0,
                                     stdout=" ".join(options.command[1:]))
    """

    def run_command(
        self, options: RunCommandOptions, ctx: Optional[ExecutionContext] = None
    ) -> CommandOutput:
        ...


def run_command_and_get_stdout_as_string(
    executor: CommandExecutor, options: RunCommandOptions, ctx: Optional[ExecutionContext] = None
) -> str:
    return executor.run_command(options, ctx).stdout


def run_command_and_get_stdout_as_lines(
    executor: CommandExecutor, options: RunCommandOptions, ctx: Optional[ExecutionContext] = None
) -> List[str]:
    return executor.run_command(options, ctx).stdout_lines()
