"""Namespace adapter of a kubectl-backed cluster."""

import logging
from typing import TYPE_CHECKING, List, Optional

from kubeobj.core.errors import InvalidInputError, KubectlOutputParseError
from kubeobj.core.log import log_changed_by_ctx, log_info_by_ctx
from kubeobj.core.schema import CommandExecutor, CreateRoleOptions, ExecutionContext, RunCommandOptions
from kubeobj.core.schema.context import silent
from kubeobj.k8s.commandexecutor.object import CommandExecutorObject
from kubeobj.k8s.commandexecutor.resource import CommandExecutorResource
from kubeobj.k8s.commandexecutor.role import CommandExecutorRole

if TYPE_CHECKING:
    from kubeobj.k8s.commandexecutor.cluster import CommandExecutorKubernetes

logger = logging.getLogger(__name__)


class CommandExecutorNamespace:
    """A namespace in a :class:`CommandExecutorKubernetes` cluster.

    Besides handing out object and resource adapters, the namespace manages
    its RBAC roles. Role creation and deletion are idempotent.
    """

    def __init__(self, cluster: "CommandExecutorKubernetes", name: str) -> None:
        if cluster is None:
            raise InvalidInputError("cluster is None")
        if not name:
            raise InvalidInputError("name is empty string")

        self.cluster = cluster
        self.name = name

    def __repr__(self) -> str:
        return f"CommandExecutorNamespace(name={self.name!r}, cluster={self.cluster.name!r})"

    @property
    def cluster_name(self) -> str:
        return self.cluster.name

    @property
    def command_executor(self) -> CommandExecutor:
        return self.cluster.command_executor

    def create(self, ctx: Optional[ExecutionContext] = None) -> None:
        self.cluster.create_namespace_by_name(self.name, ctx)

    def delete(self, ctx: Optional[ExecutionContext] = None) -> None:
        self.cluster.delete_namespace_by_name(self.name, ctx)

    def exists(self, ctx: Optional[ExecutionContext] = None) -> bool:
        return self.cluster.namespace_by_name_exists(self.name, ctx)

    def get_object_by_names(self, object_name: str, object_type: str) -> CommandExecutorObject:
        return CommandExecutorObject(
            command_executor=self.command_executor,
            namespace=self,
            name=object_name,
            type_name=object_type,
        )

    def get_resource_by_names(self, resource_name: str, resource_type: str) -> CommandExecutorResource:
        return CommandExecutorResource(
            command_executor=self.command_executor,
            namespace=self,
            name=resource_name,
            type_name=resource_type,
        )

    # -- roles ---------------------------------------------------------------

    def get_role_by_name(self, name: str) -> CommandExecutorRole:
        return CommandExecutorRole(namespace=self, name=name)

    def list_role_names(self, ctx: Optional[ExecutionContext] = None) -> List[str]:
        """List the names of all roles in the namespace.

        Raises:
            KubectlOutputParseError: If a line is not ``role[.<group>]/<name>``
        """
        lines = self.cluster.run_command_and_get_stdout_as_lines(
            RunCommandOptions(
                command=self.cluster.kubectl_command(ctx, "--namespace", self.name, "get", "roles", "-o", "name")
            ),
            ctx,
        )

        names = []
        for line in lines:
            line = line.strip()
            if line == "":
                continue

            parts = line.split("/")
            if len(parts) != 2 or parts[0].split(".", 1)[0] != "role" or parts[1] == "":
                raise KubectlOutputParseError(f"Unable to get role name out of line='{line}'.")
            names.append(parts[1])
        return names

    def role_by_name_exists(self, name: str, ctx: Optional[ExecutionContext] = None) -> bool:
        if not name:
            raise InvalidInputError("name is empty string")

        exists = name in self.list_role_names(silent(ctx))
        log_info_by_ctx(
            logger,
            ctx,
            "Role '%s' in namespace '%s' in kubernetes cluster '%s' %s.",
            name,
            self.name,
            self.cluster_name,
            "exists" if exists else "does not exist",
        )
        return exists

    def create_role(self, options: CreateRoleOptions, ctx: Optional[ExecutionContext] = None) -> CommandExecutorRole:
        """Create a role unless one with the same name exists.

        An existing role is left unchanged, even if its rules differ.
        """
        if options is None:
            raise InvalidInputError("options is None")

        if self.role_by_name_exists(options.name, ctx):
            log_info_by_ctx(
                logger,
                ctx,
                "Role '%s' in namespace '%s' in kubernetes cluster '%s' already exists.",
                options.name,
                self.name,
                self.cluster_name,
            )
        else:
            args = ["--namespace", self.name, "create", "role", options.name]
            if options.verbs:
                args.append("--verb=" + ",".join(options.verbs))
            if options.resources:
                args.append("--resource=" + ",".join(options.resources))

            self.cluster.run_command(RunCommandOptions(command=self.cluster.kubectl_command(ctx, *args)), ctx)
            log_changed_by_ctx(
                logger,
                ctx,
                "Role '%s' in namespace '%s' in kubernetes cluster '%s' created.",
                options.name,
                self.name,
                self.cluster_name,
            )

        return self.get_role_by_name(options.name)

    def delete_role_by_name(self, name: str, ctx: Optional[ExecutionContext] = None) -> None:
        """Delete a role; an absent role is not an error."""
        if not self.role_by_name_exists(name, ctx):
            log_info_by_ctx(
                logger,
                ctx,
                "Role '%s' in namespace '%s' in kubernetes cluster '%s' already absent.",
                name,
                self.name,
                self.cluster_name,
            )
            return

        self.cluster.run_command(
            RunCommandOptions(command=self.cluster.kubectl_command(ctx, "--namespace", self.name, "delete", "role", name)),
            ctx,
        )
        log_changed_by_ctx(
            logger,
            ctx,
            "Role '%s' in namespace '%s' in kubernetes cluster '%s' deleted.",
            name,
            self.name,
            self.cluster_name,
        )
