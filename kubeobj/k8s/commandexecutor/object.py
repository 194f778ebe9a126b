"""Namespaced Kubernetes object managed through kubectl."""

import logging
from typing import TYPE_CHECKING, List, Optional

from kubeobj.core.errors import InvalidInputError, KubeObjError, is_not_found_error
from kubeobj.core.log import log_changed_by_ctx, log_info_by_ctx
from kubeobj.core.schema import (
    CommandExecutor,
    CreateObjectOptions,
    ExecutionContext,
    RunCommandOptions,
)
from kubeobj.core.schema.context import silent
from kubeobj.yamlutils import query

if TYPE_CHECKING:
    from kubeobj.k8s.commandexecutor.namespace import CommandExecutorNamespace

logger = logging.getLogger(__name__)


class CommandExecutorObject:
    """A Kubernetes object identified by type, name and namespace.

    The object is either absent or present in the cluster; :meth:`exists`
    asks kubectl which. :meth:`create_by_yaml_string` and :meth:`delete` are
    idempotent: creating a present object re-applies it, deleting an absent
    object only logs.

    Attributes:
        command_executor: Runs the kubectl processes
        namespace: Namespace the object lives in
        name: Object name
        type_name: kubectl type, e.g. "secret" or "deployment"
    """

    noun = "object"

    def __init__(
        self,
        command_executor: CommandExecutor,
        namespace: "CommandExecutorNamespace",
        name: str,
        type_name: str,
    ) -> None:
        if command_executor is None:
            raise InvalidInputError("command_executor is None")
        if namespace is None:
            raise InvalidInputError("namespace is None")
        if not name:
            raise InvalidInputError("name is empty string")
        if not type_name:
            raise InvalidInputError("type_name is empty string")

        self.command_executor = command_executor
        self.namespace = namespace
        self.name = name
        self.type_name = type_name

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(type_name={self.type_name!r}, name={self.name!r}, "
            f"namespace={self.namespace_name!r})"
        )

    @property
    def namespace_name(self) -> str:
        return self.namespace.name

    @property
    def cluster_name(self) -> str:
        return self.namespace.cluster_name

    def _kubectl_command(self, ctx: Optional[ExecutionContext], *args: str) -> List[str]:
        return self.namespace.cluster.kubectl_command(ctx, *args)

    def exists(self, ctx: Optional[ExecutionContext] = None) -> bool:
        """Tell whether the object is present in the cluster.

        A kubectl failure reporting ``(NotFound)`` means absent; any other
        failure is raised.
        """
        command = self._kubectl_command(ctx, "get", "--namespace", self.namespace_name, self.type_name, self.name)

        try:
            self.command_executor.run_command(RunCommandOptions(command=command), ctx)
            exists = True
        except KubeObjError as e:
            if not is_not_found_error(e):
                raise
            exists = False

        log_info_by_ctx(
            logger,
            ctx,
            "Kubernetes %s '%s/%s' in namespace '%s' in cluster '%s' %s.",
            self.noun,
            self.type_name,
            self.name,
            self.namespace_name,
            self.cluster_name,
            "exists" if exists else "does not exist",
        )
        return exists

    def ensure_namespace_exists(self, ctx: Optional[ExecutionContext] = None) -> None:
        self.namespace.create(ctx)

    def create_by_yaml_string(self, options: CreateObjectOptions, ctx: Optional[ExecutionContext] = None) -> None:
        """Apply a YAML document as this object.

        ``metadata.name`` and ``metadata.namespace`` of the document are
        replaced by this object's name and namespace before it is applied, and
        the namespace is created first unless ``options.skip_namespace_creation``
        is set.

        Args:
            options: YAML body and namespace handling
            ctx: Execution context

        Raises:
            InvalidInputError: If options is None
            YamlParseError: If the YAML body does not parse
            CommandFailedError: If kubectl fails
        """
        if options is None:
            raise InvalidInputError("options is None")

        log_info_by_ctx(
            logger,
            ctx,
            "Create kubernetes %s by yaml '%s/%s' in namespace '%s' in cluster '%s' started.",
            self.noun,
            self.type_name,
            self.name,
            self.namespace_name,
            self.cluster_name,
        )

        yaml_string = query.set_field(options.yaml_string, ["metadata", "name"], self.name)
        yaml_string = query.set_field(yaml_string, ["metadata", "namespace"], self.namespace_name)

        if options.skip_namespace_creation:
            log_info_by_ctx(logger, ctx, "Skip ensure namespace exists when creating %s by yaml string.", self.noun)
        else:
            self.ensure_namespace_exists(ctx)

        self.command_executor.run_command(
            RunCommandOptions(command=self._kubectl_command(ctx, "apply", "-f", "-"), stdin_string=yaml_string),
            ctx,
        )

        log_changed_by_ctx(
            logger,
            ctx,
            "Kubernetes %s '%s/%s' in namespace '%s' in cluster '%s' created and updated.",
            self.noun,
            self.type_name,
            self.name,
            self.namespace_name,
            self.cluster_name,
        )

    def delete(self, ctx: Optional[ExecutionContext] = None) -> None:
        """Delete the object; an absent object is not an error."""
        if not self.exists(ctx):
            log_info_by_ctx(
                logger,
                ctx,
                "Kubernetes %s '%s/%s' already absent in namespace '%s' in cluster '%s'.",
                self.noun,
                self.type_name,
                self.name,
                self.namespace_name,
                self.cluster_name,
            )
            return

        command = self._kubectl_command(ctx, "--namespace", self.namespace_name, "delete", self.type_name, self.name)
        self.command_executor.run_command(RunCommandOptions(command=command), ctx)

        log_changed_by_ctx(
            logger,
            ctx,
            "Kubernetes %s '%s/%s' in namespace '%s' in cluster '%s' deleted.",
            self.noun,
            self.type_name,
            self.name,
            self.namespace_name,
            self.cluster_name,
        )

    def get_as_yaml_string(self, ctx: Optional[ExecutionContext] = None) -> str:
        """Return the object as kubectl renders it with ``-o yaml``.

        Raises:
            KubeObjError: If kubectl returns no output
        """
        ctx = silent(ctx)
        command = self._kubectl_command(
            ctx, "get", "--namespace", self.namespace_name, self.type_name, self.name, "-o", "yaml"
        )
        yaml_string = self.command_executor.run_command(RunCommandOptions(command=command), ctx).stdout

        if yaml_string == "":
            raise KubeObjError(
                f"yaml_string is empty string after evaluation. Tried to get {self.noun} type "
                f"'{self.type_name}' named '{self.name}' in namespace '{self.namespace_name}' "
                f"in cluster '{self.cluster_name}'."
            )

        return yaml_string
