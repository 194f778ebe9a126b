"""Resource flavour of the kubectl object adapter."""

from typing import Optional

from kubeobj.core.schema import CreateResourceOptions, ExecutionContext
from kubeobj.k8s.commandexecutor.object import CommandExecutorObject


class CommandExecutorResource(CommandExecutorObject):
    """Kubernetes resource; behaves exactly like :class:`CommandExecutorObject`."""

    noun = "resource"

    def create_by_yaml_string(self, options: CreateResourceOptions, ctx: Optional[ExecutionContext] = None) -> None:
        super().create_by_yaml_string(options, ctx)
