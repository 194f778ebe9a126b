"""Execution context threaded through every adapter call."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExecutionContext:
    """Per-call settings for command execution.

    Attributes:
        verbose: Log adapter progress at INFO instead of DEBUG
        timeout_seconds: Upper bound for each external process; the process is
            killed when it expires (None for no limit)
        in_cluster_authentication: Force in-cluster authentication on (True) or
            off (False). None detects it from the environment.
    """

    verbose: bool = False
    timeout_seconds: Optional[float] = None
    in_cluster_authentication: Optional[bool] = None


def silent(ctx: Optional[ExecutionContext] = None) -> ExecutionContext:
    """Return a copy of ``ctx`` with verbosity switched off."""
    if ctx is None:
        return ExecutionContext()
    return ExecutionContext(
        verbose=False,
        timeout_seconds=ctx.timeout_seconds,
        in_cluster_authentication=ctx.in_cluster_authentication,
    )
