"""kubeobj CLI - Command-line interface for Kubernetes object YAML.

Offline commands work on manifest files (sort, split, merge, validate);
cluster commands drive kubectl for a single object (exists, get-yaml, apply,
delete).
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from kubeobj.core.config import get_kubectl_settings
from kubeobj.core.errors import KubeObjError
from kubeobj.core.schema import CreateObjectOptions, ExecutionContext
from kubeobj.k8s.commandexecutor import get_cluster_by_name
from kubeobj.k8s.objects_yaml import sort_objects_yaml, unmarshal_object_yaml
from kubeobj.yamlutils.multidoc import merge_multi_yaml, split_multi_yaml

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubeobj",
        description="kubeobj - Kubernetes object YAML tooling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sort the objects of a manifest by namespace, name and kind
  kubeobj sort manifests.yaml --in-place

  # Split a manifest into one file per object
  kubeobj split manifests.yaml --out objects/

  # Check whether a secret exists
  kubeobj exists --cluster kind-dev --namespace demo secret my-secret

  # Apply a document as deployment 'web' in namespace 'demo'
  kubeobj apply --cluster kind-dev --namespace demo deployment web -f web.yaml

Note:
  kubectl binary, timeout and context can be set in config.json:
  {"kubectl": {"binary": "kubectl", "timeout_seconds": 30, "context": "kind-dev"}}
"""
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    sort_parser = subparsers.add_parser("sort", help="Sort objects by namespace, name and kind")
    sort_parser.add_argument("input", help="Path to multi-document manifest")
    sort_parser.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite the input file instead of printing the result"
    )

    split_parser = subparsers.add_parser("split", help="Write every document to its own file")
    split_parser.add_argument("input", help="Path to multi-document manifest")
    split_parser.add_argument("--out", required=True, help="Output directory")

    merge_parser = subparsers.add_parser("merge", help="Merge manifests into one multi-document YAML")
    merge_parser.add_argument("inputs", nargs="+", help="Manifest files to merge")

    validate_parser = subparsers.add_parser("validate", help="Check that every document is a valid object")
    validate_parser.add_argument("input", help="Path to multi-document manifest")

    for command, help_text in (
        ("exists", "Tell whether an object exists"),
        ("get-yaml", "Print an object as YAML"),
        ("apply", "Create or update an object from YAML"),
        ("delete", "Delete an object"),
    ):
        object_parser = subparsers.add_parser(command, help=help_text)
        object_parser.add_argument("--cluster", required=True, help="Cluster name as known to kubectl")
        object_parser.add_argument("--namespace", required=True, help="Namespace of the object")
        object_parser.add_argument("type", help="Object type, e.g. secret")
        object_parser.add_argument("name", help="Object name")
        if command == "apply":
            object_parser.add_argument("-f", "--filename", required=True, help="YAML file to apply")
            object_parser.add_argument(
                "--skip-namespace-creation",
                action="store_true",
                help="Do not create the namespace if it is missing"
            )

    return parser


def main(argv=None):
    """Main CLI entrypoint for kubeobj."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
    else:
        logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

    handlers = {
        "sort": cmd_sort,
        "split": cmd_split,
        "merge": cmd_merge,
        "validate": cmd_validate,
        "exists": cmd_exists,
        "get-yaml": cmd_get_yaml,
        "apply": cmd_apply,
        "delete": cmd_delete,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (KubeObjError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("Command '%s' failed", args.command, exc_info=True)
        return 1


def cmd_sort(args):
    input_path = Path(args.input)
    sorted_yaml = sort_objects_yaml(input_path.read_text(encoding="utf-8"))

    if args.in_place:
        input_path.write_text(sorted_yaml, encoding="utf-8")
        print(f"Sorted: {input_path}")
    else:
        sys.stdout.write(sorted_yaml)
    return 0


def _file_name_part(value):
    """Make an object field safe to use inside a single file name."""
    for separator in {"/", "\\", os.sep}:
        value = value.replace(separator, "_")
    return value.replace("..", "_")


def cmd_split(args):
    input_path = Path(args.input)
    output_dir = Path(args.out)

    objects = unmarshal_object_yaml(input_path.read_text(encoding="utf-8"))
    output_dir.mkdir(parents=True, exist_ok=True)

    for index, entry in enumerate(objects):
        namespace = _file_name_part(entry.namespace or "_cluster")
        kind = _file_name_part(entry.kind)
        name = _file_name_part(entry.name)
        file_path = output_dir / f"{index:03d}_{namespace}_{kind}_{name}.yaml".lower()
        file_path.write_text(entry.content, encoding="utf-8")
        print(f"Wrote: {file_path}")

    return 0


def cmd_merge(args):
    documents = []
    for input_file in args.inputs:
        documents.extend(split_multi_yaml(Path(input_file).read_text(encoding="utf-8")))

    sys.stdout.write(merge_multi_yaml(documents))
    return 0


def cmd_validate(args):
    objects = unmarshal_object_yaml(Path(args.input).read_text(encoding="utf-8"))
    for entry in objects:
        print(f"{entry.namespace or '-'}\t{entry.kind}\t{entry.name}")
    print(f"✓ {len(objects)} valid objects")
    return 0


def _get_object(args):
    cluster = get_cluster_by_name(args.cluster, get_kubectl_settings())
    return cluster.get_object_by_names(args.name, args.type, args.namespace)


def _ctx(args):
    return ExecutionContext(verbose=args.verbose)


def cmd_exists(args):
    exists = _get_object(args).exists(_ctx(args))
    print("true" if exists else "false")
    return 0 if exists else 2


def cmd_get_yaml(args):
    sys.stdout.write(_get_object(args).get_as_yaml_string(_ctx(args)))
    return 0


def cmd_apply(args):
    options = CreateObjectOptions(
        yaml_string=Path(args.filename).read_text(encoding="utf-8"),
        skip_namespace_creation=args.skip_namespace_creation,
    )
    _get_object(args).create_by_yaml_string(options, _ctx(args))
    print(f"Applied {args.type}/{args.name} in namespace {args.namespace}")
    return 0


def cmd_delete(args):
    _get_object(args).delete(_ctx(args))
    print(f"Deleted {args.type}/{args.name} in namespace {args.namespace}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
