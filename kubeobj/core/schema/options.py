"""Option records for kubectl adapter operations."""

from dataclasses import dataclass, field
from typing import List

from kubeobj.core.errors import InvalidInputError


@dataclass(frozen=True)
class CreateObjectOptions:
    """Options for creating an object from a YAML document.

    Attributes:
        yaml_string: The object's YAML body. ``metadata.name`` and
            ``metadata.namespace`` are overwritten with the target identity.
        skip_namespace_creation: Do not ensure the namespace exists first
    """

    yaml_string: str
    skip_namespace_creation: bool = False

    def __post_init__(self) -> None:
        if not self.yaml_string:
            raise InvalidInputError("yaml_string is empty string")


@dataclass(frozen=True)
class CreateResourceOptions(CreateObjectOptions):
    """Same as :class:`CreateObjectOptions`, for the resource naming."""


@dataclass(frozen=True)
class ListObjectsOptions:
    namespace: str
    object_type: str

    def __post_init__(self) -> None:
        if not self.namespace:
            raise InvalidInputError("namespace is empty string")
        if not self.object_type:
            raise InvalidInputError("object_type is empty string")


@dataclass(frozen=True)
class CreateRoleOptions:
    """Options for creating a namespaced RBAC role.

    Attributes:
        name: Role name
        verbs: Allowed verbs, e.g. ["get", "list"]
        resources: Resources the verbs apply to, e.g. ["pods"]
    """

    name: str
    verbs: List[str] = field(default_factory=list)
    resources: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidInputError("name is empty string")
