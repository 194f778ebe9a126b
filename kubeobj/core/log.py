"""Context-aware logging helpers.

Adapters report progress through these helpers so that a verbose
:class:`~kubeobj.core.schema.context.ExecutionContext` surfaces the messages at
INFO while a quiet one keeps them at DEBUG.
"""

import logging
from typing import Any, Optional

from kubeobj.core.schema.context import ExecutionContext


def _level(ctx: Optional[ExecutionContext]) -> int:
    if ctx is not None and ctx.verbose:
        return logging.INFO
    return logging.DEBUG


def log_info_by_ctx(logger: logging.Logger, ctx: Optional[ExecutionContext], msg: str, *args: Any) -> None:
    logger.log(_level(ctx), msg, *args)


def log_changed_by_ctx(logger: logging.Logger, ctx: Optional[ExecutionContext], msg: str, *args: Any) -> None:
    """Log a state change (object created, deleted, applied)."""
    logger.log(_level(ctx), "[changed] " + msg, *args)
