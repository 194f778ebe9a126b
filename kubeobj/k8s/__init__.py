"""Kubernetes (K8s) object model for kubeobj.

- ObjectYamlEntry: one Kubernetes object as a YAML document
- unmarshal/sort of multi-document manifests
- kubectl adapters for clusters, namespaces and objects
"""

from kubeobj.k8s.objects_yaml import (
    ObjectYamlEntry,
    ResourceYamlEntry,
    is_before_in_alphabet,
    marshal_object_yaml,
    sort_objects_yaml,
    sort_resources_yaml,
    unmarshal_object_yaml,
    unmarshal_resource_yaml,
)

__all__ = [
    "ObjectYamlEntry",
    "ResourceYamlEntry",
    "is_before_in_alphabet",
    "marshal_object_yaml",
    "sort_objects_yaml",
    "sort_resources_yaml",
    "unmarshal_object_yaml",
    "unmarshal_resource_yaml",
]
