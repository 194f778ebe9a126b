"""YAML validation, loading and key-path access.

Reading uses the safe loader; writing uses the round-trip loader so comments
and formatting of the surrounding document are preserved.
"""

import json
from io import StringIO
from typing import Any, List, Optional, Sequence

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.nodes import MappingNode, Node, ScalarNode

from kubeobj.core.errors import InvalidInputError, InvalidYamlError, YamlParseError


def _create_yaml_instance() -> YAML:
    """Create round-trip ruamel.yaml instance for manifest editing.

    Returns:
        YAML instance configured to:
        - Preserve quotes and formatting
        - Not wrap long strings (image references, annotations)
        - Use block style
    """
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 4096
    yaml.default_flow_style = False
    yaml.allow_unicode = True
    return yaml


def _create_safe_yaml_instance() -> YAML:
    return YAML(typ="safe", pure=True)


def load_generic(yaml_string: str) -> Any:
    """Parse the first YAML document into plain Python data.

    Raises:
        YamlParseError: If the text is not valid YAML
    """
    try:
        return _create_safe_yaml_instance().load(yaml_string)
    except Exception as e:
        raise YamlParseError(f"invalid yaml: {e}", document=yaml_string) from e


def validate(yaml_string: str, refuse_pure_json: bool = False) -> None:
    """Check that a string holds valid YAML.

    Args:
        yaml_string: Text to check
        refuse_pure_json: Also reject documents that are plain JSON

    Raises:
        InvalidYamlError: For empty/whitespace-only input, or JSON when refused
        YamlParseError: If the parser rejects the text
    """
    trimmed = yaml_string.strip()
    if trimmed == "":
        raise InvalidYamlError("empty string is not a valid yaml")

    load_generic(yaml_string)

    if refuse_pure_json:
        try:
            json.loads(trimmed)
        except ValueError:
            return
        raise InvalidYamlError("only JSON data in document")


def is_yaml(yaml_string: str, refuse_pure_json: bool = False) -> bool:
    try:
        validate(yaml_string, refuse_pure_json=refuse_pure_json)
    except InvalidYamlError:
        return False
    return True


def data_to_yaml_string(data: Any) -> str:
    """Dump data as a block-style YAML document starting with ``---``."""
    stream = StringIO()
    yaml = _create_yaml_instance()
    yaml.explicit_start = True
    yaml.dump(data, stream)
    return stream.getvalue()


_NULL_PLAIN_SCALARS = ("", "~", "null", "Null", "NULL")


def _compose(yaml_string: str) -> Optional[Node]:
    return _create_safe_yaml_instance().compose(yaml_string)


def _mapping_child(node: Node, key: str) -> Optional[Node]:
    if not isinstance(node, MappingNode):
        return None

    found = None
    for key_node, value_node in node.value:
        if isinstance(key_node, ScalarNode) and key_node.value == key:
            found = value_node
    return found


def get_field(yaml_string: str, keys: Sequence[str]) -> Optional[str]:
    """Read the scalar at a key path of the first document as text.

    ``get_field(doc, ["metadata", "name"])`` corresponds to the query
    ``.metadata.name``. The value is the scalar's source text, so ``0x1f``
    or ``1.10`` are returned unchanged. An explicit null value reads as ``""``.

    Returns:
        The value as text, or None if the path is absent, the value is not a
        scalar, or the document does not parse
    """
    try:
        node = _compose(yaml_string)
    except Exception:
        return None

    for key in keys:
        if node is None:
            return None
        node = _mapping_child(node, key)

    if not isinstance(node, ScalarNode):
        return None
    if node.style is None and node.value in _NULL_PLAIN_SCALARS:
        return ""
    return node.value


def set_field(yaml_string: str, keys: Sequence[str], value: str) -> str:
    """Assign a string value at a key path in every document.

    Intermediate mappings are created as needed; comments and formatting of
    the rest of the document are preserved. Equivalent to the query
    ``.metadata.name="value"`` for ``keys=["metadata", "name"]``.

    Args:
        yaml_string: One or more YAML documents
        keys: Non-empty key path
        value: String to store

    Returns:
        The modified YAML without trailing line break

    Raises:
        InvalidInputError: If ``keys`` is empty
        YamlParseError: If the YAML does not parse
        InvalidYamlError: If a document or an intermediate node is not a mapping
    """
    if not keys:
        raise InvalidInputError("keys is empty")

    yaml = _create_yaml_instance()
    try:
        documents: List[Any] = list(yaml.load_all(yaml_string))
    except Exception as e:
        raise YamlParseError(f"invalid yaml: {e}", document=yaml_string) from e

    if not documents:
        documents = [None]

    updated = []
    for document in documents:
        if document is None:
            document = CommentedMap()
        if not isinstance(document, dict):
            raise InvalidYamlError(
                f"Unable to set '.{'.'.join(keys)}': document is not a mapping"
            )

        node = document
        for key in keys[:-1]:
            child = node.get(key)
            if child is None:
                child = CommentedMap()
                node[key] = child
            elif not isinstance(child, dict):
                raise InvalidYamlError(f"Unable to set '.{'.'.join(keys)}': '{key}' is not a mapping")
            node = child
        node[keys[-1]] = value
        updated.append(document)

    stream = StringIO()
    yaml.dump_all(updated, stream)
    return stream.getvalue().rstrip("\n")
