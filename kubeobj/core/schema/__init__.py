"""
Shared records and protocols: execution context, command options and output,
the command-executor capability and adapter option records.
"""

from kubeobj.core.schema.command_executor import (
    CommandExecutor,
    run_command_and_get_stdout_as_lines,
    run_command_and_get_stdout_as_string,
)
from kubeobj.core.schema.command_output import CommandOutput
from kubeobj.core.schema.context import ExecutionContext
from kubeobj.core.schema.options import (
    CreateObjectOptions,
    CreateResourceOptions,
    CreateRoleOptions,
    ListObjectsOptions,
)
from kubeobj.core.schema.run_options import RunCommandOptions

__all__ = [
    "CommandExecutor",
    "CommandOutput",
    "CreateObjectOptions",
    "CreateResourceOptions",
    "CreateRoleOptions",
    "ExecutionContext",
    "ListObjectsOptions",
    "RunCommandOptions",
    "run_command_and_get_stdout_as_lines",
    "run_command_and_get_stdout_as_string",
]
