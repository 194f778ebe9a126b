"""Kubernetes cluster adapter backed by kubectl invocations."""

import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from kubeobj.core.config import KubectlSettings, get_kubectl_settings
from kubeobj.core.errors import (
    ClusterNotAccessibleError,
    InvalidInputError,
    KubeObjError,
    KubectlContextNotFoundError,
    KubectlOutputParseError,
)
from kubeobj.core.log import log_changed_by_ctx, log_info_by_ctx
from kubeobj.core.schema import (
    CommandExecutor,
    CommandOutput,
    ExecutionContext,
    ListObjectsOptions,
    RunCommandOptions,
)
from kubeobj.core.schema.context import silent
from kubeobj.k8s.auth import is_in_cluster_authentication_available
from kubeobj.k8s.commandexecutor.namespace import CommandExecutorNamespace
from kubeobj.k8s.commandexecutor.object import CommandExecutorObject
from kubeobj.k8s.commandexecutor.resource import CommandExecutorResource
from kubeobj.k8s.kubectl_context import KubectlContext, parse_kubectl_contexts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserInfo:
    """Identity the cluster sees for the current credentials."""

    username: str


class CommandExecutorKubernetes:
    """A Kubernetes cluster reached through kubectl.

    Every operation is a single synchronous kubectl invocation through the
    injected command executor. Unless in-cluster authentication is available
    the commands carry ``--context`` with the kubectl context whose cluster
    matches :attr:`name`.

    Attributes:
        command_executor: Runs the kubectl processes
        name: Cluster name as listed by ``kubectl config get-contexts``
        kubectl_binary: kubectl executable (default: "kubectl")
        cached_context_name: kubectl context, looked up on first use if None
    """

    def __init__(
        self,
        command_executor: CommandExecutor,
        name: str,
        kubectl_binary: str = "kubectl",
        cached_context_name: Optional[str] = None,
    ) -> None:
        if command_executor is None:
            raise InvalidInputError("command_executor is None")
        if not name:
            raise InvalidInputError("name is empty string")
        if not kubectl_binary:
            raise InvalidInputError("kubectl_binary is empty string")

        self.command_executor = command_executor
        self.name = name
        self.kubectl_binary = kubectl_binary
        self.cached_context_name = cached_context_name

    def __repr__(self) -> str:
        return f"CommandExecutorKubernetes(name={self.name!r})"

    # -- command helpers ---------------------------------------------------

    def run_command(self, options: RunCommandOptions, ctx: Optional[ExecutionContext] = None) -> CommandOutput:
        if options is None:
            raise InvalidInputError("options is None")
        return self.command_executor.run_command(options, ctx)

    def run_command_and_get_stdout_as_lines(
        self, options: RunCommandOptions, ctx: Optional[ExecutionContext] = None
    ) -> List[str]:
        return self.run_command(options, ctx).stdout_lines()

    def kubectl_command(self, ctx: Optional[ExecutionContext], *args: str) -> List[str]:
        """Build a kubectl argv, adding ``--context`` unless authenticated in-cluster."""
        command = [self.kubectl_binary]
        if is_in_cluster_authentication_available(ctx):
            log_info_by_ctx(logger, ctx, "Kubernetes in cluster authentication is used. Cluster context is not used.")
        else:
            command += ["--context", self.get_cached_kubectl_context(ctx)]
        command += list(args)
        return command

    # -- kubectl contexts ----------------------------------------------------

    def get_kubectl_contexts(self) -> List[KubectlContext]:
        lines = self.run_command_and_get_stdout_as_lines(
            RunCommandOptions(command=[self.kubectl_binary, "config", "get-contexts", "--no-headers"]),
            silent(),
        )
        return parse_kubectl_contexts(lines)

    def get_kubectl_context(self, ctx: Optional[ExecutionContext] = None) -> str:
        """Look up the kubectl context pointing at this cluster.

        Raises:
            KubectlContextNotFoundError: If no context uses this cluster
        """
        for context in self.get_kubectl_contexts():
            if context.cluster == self.name:
                log_info_by_ctx(logger, ctx, "Kubectl context for cluster '%s' is '%s'.", self.name, context.name)
                return context.name

        raise KubectlContextNotFoundError(f"No kubectl context for cluster '{self.name}' found.")

    def get_cached_kubectl_context(self, ctx: Optional[ExecutionContext] = None) -> str:
        if self.cached_context_name is None:
            self.cached_context_name = self.get_kubectl_context(ctx)
        return self.cached_context_name

    # -- namespaces ----------------------------------------------------------

    def get_namespace_by_name(self, name: str) -> CommandExecutorNamespace:
        if not name:
            raise InvalidInputError("name is empty string")
        return CommandExecutorNamespace(cluster=self, name=name)

    def list_namespace_names(self, ctx: Optional[ExecutionContext] = None) -> List[str]:
        lines = self.run_command_and_get_stdout_as_lines(
            RunCommandOptions(command=self.kubectl_command(ctx, "get", "namespaces", "-o", "name")),
            ctx,
        )

        names = []
        for line in lines:
            line = line.strip()
            if line == "":
                continue
            if line.startswith("namespace/"):
                line = line[len("namespace/"):]
            names.append(line)
        return names

    def list_namespaces(self, ctx: Optional[ExecutionContext] = None) -> List[CommandExecutorNamespace]:
        return [self.get_namespace_by_name(name) for name in self.list_namespace_names(ctx)]

    def namespace_by_name_exists(self, name: str, ctx: Optional[ExecutionContext] = None) -> bool:
        if not name:
            raise InvalidInputError("name is empty string")

        exists = name in self.list_namespace_names(ctx)
        if exists:
            log_info_by_ctx(logger, ctx, "Namespace '%s' exists in kubernetes cluster '%s'.", name, self.name)
        else:
            log_info_by_ctx(logger, ctx, "Namespace '%s' does not exist in kubernetes cluster '%s'.", name, self.name)
        return exists

    def create_namespace_by_name(self, name: str, ctx: Optional[ExecutionContext] = None) -> CommandExecutorNamespace:
        """Create the namespace unless it already exists."""
        if not name:
            raise InvalidInputError("name is empty string")

        if self.namespace_by_name_exists(name, ctx):
            log_info_by_ctx(logger, ctx, "Namespace '%s' already exists in cluster '%s'.", name, self.name)
        else:
            self.run_command(RunCommandOptions(command=self.kubectl_command(ctx, "create", "namespace", name)), ctx)
            log_changed_by_ctx(logger, ctx, "Namespace '%s' in cluster '%s' created.", name, self.name)

        return self.get_namespace_by_name(name)

    def delete_namespace_by_name(self, name: str, ctx: Optional[ExecutionContext] = None) -> None:
        """Delete the namespace; an absent namespace is not an error."""
        if not name:
            raise InvalidInputError("name is empty string")

        if self.namespace_by_name_exists(name, ctx):
            self.run_command(RunCommandOptions(command=self.kubectl_command(ctx, "delete", "namespace", name)), ctx)
            log_changed_by_ctx(logger, ctx, "Namespace '%s' in cluster '%s' deleted.", name, self.name)
        else:
            log_info_by_ctx(logger, ctx, "Namespace '%s' already absent in cluster '%s'.", name, self.name)

    # -- objects -------------------------------------------------------------

    def get_object_by_names(self, object_name: str, object_type: str, namespace_name: str) -> CommandExecutorObject:
        if not object_name:
            raise InvalidInputError("object_name is empty string")
        if not object_type:
            raise InvalidInputError("object_type is empty string")
        if not namespace_name:
            raise InvalidInputError("namespace_name is empty string")

        return self.get_namespace_by_name(namespace_name).get_object_by_names(object_name, object_type)

    def get_resource_by_names(
        self, resource_name: str, resource_type: str, namespace_name: str
    ) -> CommandExecutorResource:
        if not resource_name:
            raise InvalidInputError("resource_name is empty string")
        if not resource_type:
            raise InvalidInputError("resource_type is empty string")
        if not namespace_name:
            raise InvalidInputError("namespace_name is empty string")

        return self.get_namespace_by_name(namespace_name).get_resource_by_names(resource_name, resource_type)

    def list_object_names(self, options: ListObjectsOptions, ctx: Optional[ExecutionContext] = None) -> List[str]:
        """List names of all objects of a type in a namespace, sorted."""
        if options is None:
            raise InvalidInputError("options is None")

        lines = self.run_command_and_get_stdout_as_lines(
            RunCommandOptions(
                command=self.kubectl_command(
                    ctx, "get", "--namespace", options.namespace, "-o", "name", options.object_type
                )
            ),
            ctx,
        )

        names = []
        for line in lines:
            line = line.strip()
            if line == "":
                continue
            # kubectl prints "<kind>[.<group>]/<name>"
            names.append(line.rsplit("/", 1)[-1])
        return sorted(names)

    def list_objects(
        self, options: ListObjectsOptions, ctx: Optional[ExecutionContext] = None
    ) -> List[CommandExecutorObject]:
        return [
            self.get_object_by_names(name, options.object_type, options.namespace)
            for name in self.list_object_names(options, ctx)
        ]

    # -- access checks -------------------------------------------------------

    def who_am_i(self, ctx: Optional[ExecutionContext] = None) -> UserInfo:
        stdout = self.run_command(
            RunCommandOptions(command=self.kubectl_command(ctx, "auth", "whoami", "-ojson")), ctx
        ).stdout

        try:
            username = json.loads(stdout)["status"]["userInfo"]["username"]
        except (ValueError, KeyError, TypeError) as e:
            raise KubectlOutputParseError(f"Unable to get username from whoami output: '{stdout}'") from e

        log_info_by_ctx(logger, ctx, "Whoami: user '%s' is used to log in to cluster '%s'.", username, self.name)
        return UserInfo(username=username)

    def check_accessible(self, ctx: Optional[ExecutionContext] = None) -> None:
        """Raise :class:`ClusterNotAccessibleError` unless the cluster answers."""
        try:
            self.who_am_i(ctx)
        except KubeObjError as e:
            raise ClusterNotAccessibleError(f"Cluster '{self.name}' is not reachable.") from e

        log_info_by_ctx(logger, ctx, "Cluster '%s' is reachable.", self.name)


def get_command_executor_kubernetes_by_name(
    command_executor: CommandExecutor, cluster_name: str, settings: Optional[KubectlSettings] = None
) -> CommandExecutorKubernetes:
    if settings is None:
        settings = KubectlSettings()
    return CommandExecutorKubernetes(
        command_executor=command_executor,
        name=cluster_name,
        kubectl_binary=settings.binary,
        cached_context_name=settings.context,
    )


def get_cluster_by_name(cluster_name: str, settings: Optional[KubectlSettings] = None) -> CommandExecutorKubernetes:
    """Cluster adapter running kubectl as local processes.

    Settings default to the ``kubectl`` section of the configuration.
    """
    from kubeobj.executors.exec import ExecCommandExecutor

    if not cluster_name:
        raise InvalidInputError("cluster_name is empty string")
    if settings is None:
        settings = get_kubectl_settings()

    return get_command_executor_kubernetes_by_name(
        ExecCommandExecutor(default_timeout_seconds=settings.timeout_seconds),
        cluster_name,
        settings,
    )
