"""Shared fixtures: an in-memory kubectl for adapter tests."""

from typing import Dict, List, Optional, Tuple

import pytest
from ruamel.yaml import YAML

from kubeobj.core.errors import CommandFailedError
from kubeobj.core.schema import CommandOutput, ExecutionContext, RunCommandOptions
from kubeobj.k8s.commandexecutor import CommandExecutorKubernetes


def _pop_flag(args: List[str], flag: str) -> Optional[str]:
    if flag not in args:
        return None
    index = args.index(flag)
    value = args[index + 1]
    del args[index:index + 2]
    return value


def _normalize_type(type_name: str) -> str:
    return type_name.lower().rstrip("s")


class FakeKubectl:
    """CommandExecutor that emulates the kubectl calls the adapters make.

    Keeps namespaces and objects in memory and answers like kubectl does,
    including the "(NotFound)" error text for missing objects.
    """

    def __init__(self, contexts=None, namespaces=None, username: str = "dev-user"):
        self.contexts = contexts if contexts is not None else [
            ("kind-dev", "dev-cluster", "dev-user"),
            ("kind-prod", "prod-cluster", "prod-user"),
        ]
        self.namespaces = set(namespaces if namespaces is not None else ["default"])
        self.objects: Dict[Tuple[str, str, str], str] = {}
        self.username = username
        self.calls: List[List[str]] = []
        self.stdins: List[str] = []
        self.unreachable = False

    def commands_starting_with(self, *prefix: str) -> List[List[str]]:
        return [call for call in self.calls if call[:len(prefix)] == list(prefix)]

    def _fail(self, argv: List[str], stderr: str) -> None:
        raise CommandFailedError(
            f"Command failed: '{' '.join(argv)}', exit code 1\n{stderr}",
            command=argv,
            returncode=1,
            stderr=stderr,
        )

    def _ok(self, argv: List[str], stdout: str = "") -> CommandOutput:
        return CommandOutput(command=argv, returncode=0, stdout=stdout, stderr="")

    def run_command(self, options: RunCommandOptions, ctx: Optional[ExecutionContext] = None) -> CommandOutput:
        argv = list(options.command)
        self.calls.append(argv)
        if options.stdin_string is not None:
            self.stdins.append(options.stdin_string)

        assert argv[0] == "kubectl"
        args = argv[1:]
        _pop_flag(args, "--context")
        namespace = _pop_flag(args, "--namespace") or "default"
        output = _pop_flag(args, "-o")
        if "-ojson" in args:
            args.remove("-ojson")
            output = "json"

        if args == ["config", "get-contexts", "--no-headers"]:
            lines = []
            for index, (name, cluster, user) in enumerate(self.contexts):
                marker = "*" if index == 0 else " "
                lines.append(f"{marker}         {name}   {cluster}   {user}   ")
            return self._ok(argv, "\n".join(lines) + "\n")

        if self.unreachable:
            self._fail(argv, "The connection to the server localhost:8080 was refused")

        if args == ["get", "namespaces"] and output == "name":
            return self._ok(argv, "".join(f"namespace/{n}\n" for n in sorted(self.namespaces)))

        if args[:2] == ["create", "namespace"]:
            if args[2] in self.namespaces:
                self._fail(argv, f'Error from server (AlreadyExists): namespaces "{args[2]}" already exists')
            self.namespaces.add(args[2])
            return self._ok(argv, f"namespace/{args[2]} created\n")

        if args[:2] == ["delete", "namespace"]:
            if args[2] not in self.namespaces:
                self._fail(argv, f'Error from server (NotFound): namespaces "{args[2]}" not found')
            self.namespaces.discard(args[2])
            self.objects = {key: value for key, value in self.objects.items() if key[0] != args[2]}
            return self._ok(argv, f'namespace "{args[2]}" deleted\n')

        if args[:2] == ["create", "role"]:
            if namespace not in self.namespaces:
                self._fail(argv, f'Error from server (NotFound): namespaces "{namespace}" not found')
            key = (namespace, "role", args[2])
            if key in self.objects:
                self._fail(argv, f'Error from server (AlreadyExists): roles.rbac.authorization.k8s.io "{args[2]}" already exists')
            self.objects[key] = (
                "apiVersion: rbac.authorization.k8s.io/v1\nkind: Role\n"
                f"metadata:\n  name: {args[2]}\n  namespace: {namespace}\n"
            )
            return self._ok(argv, f"role.rbac.authorization.k8s.io/{args[2]} created\n")

        if args == ["apply", "-f", "-"]:
            document = YAML(typ="safe", pure=True).load(options.stdin_string)
            target_namespace = document["metadata"].get("namespace", "default")
            if target_namespace not in self.namespaces:
                self._fail(argv, f'Error from server (NotFound): namespaces "{target_namespace}" not found')
            key = (target_namespace, _normalize_type(document["kind"]), document["metadata"]["name"])
            self.objects[key] = options.stdin_string
            return self._ok(argv, f"{document['kind'].lower()}/{key[2]} configured\n")

        if args[:1] == ["auth"] and output == "json":
            return self._ok(argv, '{"kind": "SelfSubjectReview", "status": {"userInfo": {"username": "%s"}}}' % self.username)

        if args[0] == "get" and len(args) == 2 and output == "name":
            type_name = _normalize_type(args[1])
            names = [key[2] for key in self.objects if key[0] == namespace and key[1] == type_name]
            return self._ok(argv, "".join(f"{type_name}/{name}\n" for name in names))

        if args[0] in ("get", "delete") and len(args) == 3:
            key = (namespace, _normalize_type(args[1]), args[2])
            if key not in self.objects:
                self._fail(argv, f'Error from server (NotFound): {args[1]} "{args[2]}" not found')
            if args[0] == "delete":
                del self.objects[key]
                return self._ok(argv, f'{args[1]} "{args[2]}" deleted\n')
            if output == "yaml":
                return self._ok(argv, self.objects[key] + "\n")
            return self._ok(argv, f"NAME   AGE\n{args[2]}   1s\n")

        raise AssertionError(f"unexpected kubectl call: {argv}")


@pytest.fixture
def fake_kubectl() -> FakeKubectl:
    return FakeKubectl()


@pytest.fixture
def cluster(fake_kubectl: FakeKubectl) -> CommandExecutorKubernetes:
    return CommandExecutorKubernetes(command_executor=fake_kubectl, name="dev-cluster")


@pytest.fixture(autouse=True)
def _no_in_cluster_environment(monkeypatch):
    """Keep tests independent of running inside a pod."""
    monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
    monkeypatch.delenv("KUBERNETES_SERVICE_PORT", raising=False)
    monkeypatch.delenv("KUBEOBJ_AVOID_EXEC", raising=False)
