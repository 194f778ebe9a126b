"""YAML text utilities: multi-document split/merge, validation and key-path access."""

from kubeobj.yamlutils.multidoc import (
    ensure_document_start,
    ensure_ends_with_exactly_one_line_break,
    merge_multi_yaml,
    split_multi_yaml,
)
from kubeobj.yamlutils.query import (
    data_to_yaml_string,
    get_field,
    is_yaml,
    load_generic,
    set_field,
    validate,
)

__all__ = [
    "data_to_yaml_string",
    "ensure_document_start",
    "ensure_ends_with_exactly_one_line_break",
    "get_field",
    "is_yaml",
    "load_generic",
    "merge_multi_yaml",
    "set_field",
    "split_multi_yaml",
    "validate",
]
