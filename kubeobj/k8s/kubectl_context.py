"""Parsing of ``kubectl config get-contexts --no-headers`` output."""

import re
from dataclasses import dataclass
from typing import Iterable, List

from kubeobj.core.errors import KubectlOutputParseError


@dataclass(frozen=True)
class KubectlContext:
    """A kubectl context and the cluster it points at."""

    name: str
    cluster: str


def parse_kubectl_contexts(lines: Iterable[str]) -> List[KubectlContext]:
    """Parse context lines into :class:`KubectlContext` records.

    The current context is marked with a leading ``*`` which is dropped.
    Columns are NAME, CLUSTER, AUTHINFO and an optional NAMESPACE.

    Raises:
        KubectlOutputParseError: If a line has fewer than three columns
    """
    contexts = []
    for line in lines:
        line = re.sub(" +", " ", line.replace("\t", " ")).strip()
        line = line.lstrip("*").strip()

        if line == "":
            continue

        columns = line.split(" ")
        if len(columns) <= 2:
            raise KubectlOutputParseError(f"Unable to get context from line: '{line}'")

        contexts.append(KubectlContext(name=columns[0], cluster=columns[1]))

    return contexts
