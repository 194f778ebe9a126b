"""Multi-document YAML splitting and merging.

Works on the text level so that comments, key order and quoting of every
document survive a split/merge round trip unchanged. Documents are separated
by lines consisting of ``---`` (trailing whitespace ignored).
"""

import re
from typing import List, Optional, Sequence

from kubeobj.core.errors import InvalidInputError

DOCUMENT_SEPARATOR = "---"

_DOCUMENT_START_LINE = re.compile(r"\A---.*\n")


def split_lines(text: str, remove_last_line_if_empty: bool = False) -> List[str]:
    """Split text on line breaks; empty input gives no lines at all."""
    if not text:
        return []

    lines = text.replace("\r\n", "\n").split("\n")
    if remove_last_line_if_empty and len(lines) > 1 and lines[-1] == "":
        lines = lines[:-1]
    return lines


def trim_spaces_right(text: str) -> str:
    return text.rstrip("\t \n")


def trim_all_leading_new_lines(text: str) -> str:
    return text.lstrip("\n")


def ensure_ends_with_exactly_one_line_break(text: str) -> str:
    """Replace all trailing ``\\n`` by exactly one; empty input gives ``"\\n"``."""
    return text.rstrip("\n") + "\n"


def ensure_document_start(text: str) -> str:
    """Make sure ``text`` starts with a ``---`` document marker line."""
    trimmed = text.lstrip(" \t\n")
    if trimmed == DOCUMENT_SEPARATOR:
        return DOCUMENT_SEPARATOR + "\n"
    if trimmed.startswith(DOCUMENT_SEPARATOR + "\n"):
        return trimmed
    return DOCUMENT_SEPARATOR + "\n" + trimmed


def split_multi_yaml(yaml_string: str) -> List[str]:
    """Split a multi-document YAML string into its documents.

    Every returned document starts with ``"---\\n"`` and ends with exactly one
    line break. Separators with no document in progress are skipped, so
    leading or repeated ``---`` lines never produce empty documents. Blank
    lines in front of a document's first line are dropped; comment and blank
    lines inside a document are kept with trailing whitespace trimmed.

    Args:
        yaml_string: Zero or more YAML documents

    Returns:
        List of documents, empty for empty input

    Example:
        >>> split_multi_yaml("a: 1\\n---\\nb: 2\\n")
        ['---\\na: 1\\n', '---\\nb: 2\\n']
    """
    documents: List[str] = []
    current = ""

    for line in split_lines(yaml_string, remove_last_line_if_empty=True):
        trimmed = trim_spaces_right(line)
        if trimmed == DOCUMENT_SEPARATOR:
            if current == "":
                continue

            documents.append(DOCUMENT_SEPARATOR + "\n" + ensure_ends_with_exactly_one_line_break(current))
            current = ""
            continue

        if current == "":
            current = trimmed
        else:
            current += "\n" + trimmed

    if current != "":
        documents.append(DOCUMENT_SEPARATOR + "\n" + ensure_ends_with_exactly_one_line_break(current))

    return documents


def merge_multi_yaml(yamls: Optional[Sequence[str]]) -> str:
    """Merge YAML documents into one multi-document string.

    Each document is normalized before it is added: trailing whitespace and
    leading blank lines are removed, as is a leading ``---`` marker line.
    Documents that end up empty are skipped. Every kept document is emitted as
    ``"---\\n" + document`` with exactly one trailing line break.

    Args:
        yamls: Documents to merge

    Returns:
        Merged string, ``""`` for an empty sequence

    Raises:
        InvalidInputError: If ``yamls`` is None
    """
    if yamls is None:
        raise InvalidInputError("yamls is None")

    merged = ""
    for document in yamls:
        document = trim_spaces_right(document)
        document = trim_all_leading_new_lines(document)

        if document.startswith(DOCUMENT_SEPARATOR):
            document = _DOCUMENT_START_LINE.sub("", document, count=1)
            document = trim_all_leading_new_lines(document)

        if document == "":
            continue

        merged += DOCUMENT_SEPARATOR + "\n" + ensure_ends_with_exactly_one_line_break(document)

    return merged
