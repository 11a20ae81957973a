"""Mapping between object keys, prefixes and local file paths."""

import os

from bucket_tools.core.exceptions import ValidationError


def normalize_prefix(prefix: str, delimiter: str = "/") -> str:
    """Ensure a prefix ends with the delimiter.

    Raises:
        ValidationError: If the prefix is empty
    """
    if not prefix:
        raise ValidationError("prefix not specified")
    if not prefix.endswith(delimiter):
        prefix += delimiter
    return prefix


def object_to_file_name(key: str, prefix: str, folder: str) -> str:
    """Local path for an object: the key with the prefix removed, under folder.

    >>> object_to_file_name("a/b/c.txt", "a/", "/tmp")
    '/tmp/b/c.txt'
    """
    relative = key.replace(prefix, "", 1).lstrip("/")
    return os.path.join(folder, relative)


def is_within(path: str, folder: str) -> bool:
    """Whether path resolves to a location inside folder."""
    root = os.path.abspath(folder)
    target = os.path.abspath(path)
    return target != root and os.path.commonpath([root, target]) == root


def file_exists(path: str) -> bool:
    return os.path.lexists(path)
