"""
kubectl-backed adapters for clusters, namespaces, objects and resources.

The adapters translate high level verbs (create, delete, exists, get as
YAML) into kubectl invocations run by an injected command executor.
"""

from kubeobj.k8s.commandexecutor.cluster import (
    CommandExecutorKubernetes,
    UserInfo,
    get_cluster_by_name,
    get_command_executor_kubernetes_by_name,
)
from kubeobj.k8s.commandexecutor.namespace import CommandExecutorNamespace
from kubeobj.k8s.commandexecutor.object import CommandExecutorObject
from kubeobj.k8s.commandexecutor.resource import CommandExecutorResource
from kubeobj.k8s.commandexecutor.role import CommandExecutorRole

__all__ = [
    "CommandExecutorKubernetes",
    "CommandExecutorNamespace",
    "CommandExecutorObject",
    "CommandExecutorResource",
    "CommandExecutorRole",
    "UserInfo",
    "get_cluster_by_name",
    "get_command_executor_kubernetes_by_name",
]
