"""
kubeobj: Kubernetes object-YAML model and kubectl adapters

Splits, validates and deterministically sorts multi-document Kubernetes YAML,
and maps namespace/object verbs (create, delete, exists, get) onto kubectl
through an injectable command executor.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
