"""Exception hierarchy shared by the YAML model and the kubectl adapters."""

from typing import Any, List, Optional


class KubeObjError(Exception):
    """Base class for every error raised by kubeobj."""


class InvalidInputError(KubeObjError, ValueError):
    """Raised when a required argument is missing or empty.

    These are caller errors (empty name, ``None`` options, empty YAML string)
    and are never retried.
    """


class InvalidYamlError(KubeObjError):
    """Raised when a string is not acceptable as a YAML document."""


class YamlParseError(InvalidYamlError):
    """Raised when the YAML parser rejects a document.

    Attributes:
        document: The text that failed to parse (optional)
    """

    def __init__(self, message: str, document: Optional[str] = None) -> None:
        super().__init__(message)
        self.document = document


class InvalidObjectYamlError(KubeObjError):
    """Raised when a YAML document is not a valid Kubernetes object.

    Kept separate from :class:`YamlParseError` so callers can tell a missing
    ``metadata.name`` or ``kind`` apart from broken YAML syntax.
    """


class CommandFailedError(KubeObjError):
    """Raised when an external command exits with a non-zero return code.

    Attributes:
        command: The argv that was executed
        returncode: Exit code of the process (None if it never started)
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    @property
    def is_not_found(self) -> bool:
        """True if kubectl reported that the requested object does not exist."""
        return "(NotFound)" in self.stderr


class CommandTimeoutError(CommandFailedError):
    """Raised when an external command does not finish in time."""


class CommandExecutionBlockedError(KubeObjError):
    """Raised when process execution is disabled by the environment."""


class KubectlContextNotFoundError(KubeObjError):
    """Raised when no kubectl context points at the requested cluster."""


class KubectlOutputParseError(KubeObjError):
    """Raised when kubectl output does not have the expected shape."""


class ClusterNotAccessibleError(KubeObjError):
    """Raised when the cluster does not answer an authenticated request."""


def is_not_found_error(error: Any) -> bool:
    """Tell whether an exception means "object does not exist".

    Uses the captured stderr of :class:`CommandFailedError` when available and
    falls back to matching ``(NotFound)`` in the error message otherwise.
    """
    if isinstance(error, CommandFailedError) and error.is_not_found:
        return True
    return "(NotFound)" in str(error)
