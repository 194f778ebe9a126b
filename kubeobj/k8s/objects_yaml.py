"""Kubernetes object YAML model.

An :class:`ObjectYamlEntry` wraps one YAML document and derives the object's
identity (name, kind, apiVersion, namespace) from it on demand. The module
also parses multi-document manifests into entries and sorts them by
namespace, name and kind.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from kubeobj.core.errors import (
    InvalidInputError,
    InvalidObjectYamlError,
    InvalidYamlError,
    YamlParseError,
)
from kubeobj.yamlutils import multidoc, query

logger = logging.getLogger(__name__)


def is_before_in_alphabet(first: str, second: str) -> bool:
    """Tell whether ``first`` sorts strictly before ``second``.

    The empty string sorts before any non-empty string; two empty strings
    are not ordered. Otherwise plain string comparison applies.
    """
    if second == "":
        return False
    return first < second


@dataclass(frozen=True)
class ObjectYamlEntry:
    """One Kubernetes object as a raw YAML document.

    The derived fields are parsed from ``content`` on every access and read
    as ``""`` when absent or when the content does not parse. Use
    :meth:`field` to tell an absent field apart from an empty one.

    Attributes:
        content: The full YAML document, usually starting with ``---``

    Example:
        >>> entry = ObjectYamlEntry("---\\napiVersion: v1\\nkind: Secret\\nmetadata:\\n  name: abc\\n")
        >>> entry.name, entry.kind, entry.namespace
        ('abc', 'Secret', '')
    """

    content: str

    def field(self, *keys: str) -> Optional[str]:
        """Return the scalar at the key path, or None if it is not there."""
        return query.get_field(self.content, keys)

    @property
    def name(self) -> str:
        return self.field("metadata", "name") or ""

    @property
    def kind(self) -> str:
        return self.field("kind") or ""

    @property
    def api_version(self) -> str:
        return self.field("apiVersion") or ""

    @property
    def namespace(self) -> str:
        """Namespace of the object, ``""`` for cluster scoped objects."""
        return self.field("metadata", "namespace") or ""

    @property
    def sort_key(self) -> Tuple[str, str, str]:
        return (self.namespace, self.name, self.kind)

    def validate(self) -> None:
        """Check that the entry is a usable Kubernetes object.

        Raises:
            InvalidObjectYamlError: If content, name or kind is missing
            InvalidYamlError: If the content is not valid YAML
        """
        if self.content == "":
            raise InvalidObjectYamlError("Content not set")

        query.validate(self.content)

        if self.name == "":
            raise InvalidObjectYamlError("Kubernetes object YAML without a name are not valid")

        if self.kind == "":
            raise InvalidObjectYamlError("Kubernetes object YAML without a kind are not valid")


def unmarshal_object_yaml(objects_yaml: str) -> List[ObjectYamlEntry]:
    """Parse a multi-document manifest into validated entries.

    Fails on the first invalid document; no partial result is returned. The
    error keeps its type and its message starts with "document <index>:"
    (zero based).

    Args:
        objects_yaml: Zero or more YAML documents

    Returns:
        Entries in document order, empty for empty input
    """
    objects = []
    for index, document in enumerate(multidoc.split_multi_yaml(objects_yaml)):
        entry = ObjectYamlEntry(content=document)
        try:
            entry.validate()
        except YamlParseError as e:
            raise YamlParseError(f"document {index}: {e}", document=e.document) from e
        except (InvalidObjectYamlError, InvalidYamlError) as e:
            raise type(e)(f"document {index}: {e}") from e
        objects.append(entry)

    return objects


def marshal_object_yaml(objects: Optional[Sequence[ObjectYamlEntry]]) -> str:
    """Serialize entries back into one multi-document string.

    Raises:
        InvalidInputError: If ``objects`` is None
    """
    if objects is None:
        raise InvalidInputError("objects is None")

    documents = []
    for entry in objects:
        content = entry.content.strip()
        if content == "":
            continue
        documents.append(content)

    merged = multidoc.merge_multi_yaml(documents)
    return multidoc.ensure_ends_with_exactly_one_line_break(merged)


def sort_objects_yaml(objects_yaml: str) -> str:
    """Sort the objects of a multi-document manifest.

    Objects are ordered by namespace, then name, then kind. Cluster scoped
    objects (empty namespace) come first. The sort is stable.

    Args:
        objects_yaml: Zero or more Kubernetes object documents

    Returns:
        The same documents, reordered; ``"\\n"`` for empty input

    Raises:
        InvalidObjectYamlError: If a document has no name or kind
        InvalidYamlError: If a document is not valid YAML
    """
    parsed = unmarshal_object_yaml(objects_yaml)
    parsed.sort(key=lambda entry: entry.sort_key)

    logger.debug("Sorted %d kubernetes objects", len(parsed))

    return marshal_object_yaml(parsed)


# Resource naming used by older callers
ResourceYamlEntry = ObjectYamlEntry
unmarshal_resource_yaml = unmarshal_object_yaml
sort_resources_yaml = sort_objects_yaml
