"""Process-backed command executors."""

from kubeobj.executors.exec import ExecCommandExecutor

__all__ = ["ExecCommandExecutor"]
