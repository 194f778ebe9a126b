"""RBAC role in a namespace of a kubectl-backed cluster."""

from typing import TYPE_CHECKING, Optional

from kubeobj.core.errors import InvalidInputError
from kubeobj.core.schema import ExecutionContext

if TYPE_CHECKING:
    from kubeobj.k8s.commandexecutor.namespace import CommandExecutorNamespace


class CommandExecutorRole:
    """A Role identified by name within a :class:`CommandExecutorNamespace`."""

    def __init__(self, namespace: "CommandExecutorNamespace", name: str) -> None:
        if namespace is None:
            raise InvalidInputError("namespace is None")
        if not name:
            raise InvalidInputError("name is empty string")

        self.namespace = namespace
        self.name = name

    def __repr__(self) -> str:
        return f"CommandExecutorRole(name={self.name!r}, namespace={self.namespace_name!r})"

    @property
    def namespace_name(self) -> str:
        return self.namespace.name

    @property
    def cluster_name(self) -> str:
        return self.namespace.cluster_name

    def exists(self, ctx: Optional[ExecutionContext] = None) -> bool:
        return self.namespace.role_by_name_exists(self.name, ctx)

    def delete(self, ctx: Optional[ExecutionContext] = None) -> None:
        self.namespace.delete_role_by_name(self.name, ctx)
