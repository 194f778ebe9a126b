"""Detection of in-cluster authentication.

Inside a pod the service account credentials are mounted and the API server
is announced through environment variables; kubectl then needs no
``--context``.
"""

import os
from pathlib import Path
from typing import Optional

from kubeobj.core.schema.context import ExecutionContext

SERVICE_ACCOUNT_TOKEN_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/token"


def is_in_cluster_authentication_available(ctx: Optional[ExecutionContext] = None) -> bool:
    if ctx is not None and ctx.in_cluster_authentication is not None:
        return ctx.in_cluster_authentication

    if not os.environ.get("KUBERNETES_SERVICE_HOST") or not os.environ.get("KUBERNETES_SERVICE_PORT"):
        return False

    return Path(SERVICE_ACCOUNT_TOKEN_PATH).is_file()
