# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Storage path normalization.

The storage key of an object never contains the user-supplied file name.
The final path component is replaced by the record's object id, keeping
only the original extension, so names with spaces or special characters
need no escaping and two uploads named ``report.pdf`` never collide.
"""

import posixpath

from s3file.identifier import ObjectId


def clean(path: str) -> str:
    """Lexically clean a slash-separated path.

    Collapses duplicate separators and resolves ``.`` and ``..``
    segments. Unlike ``posixpath.normpath``, a leading ``//`` is reduced
    to a single ``/``.

    Args:
        path: Path to clean.

    Returns:
        Cleaned path, ``.`` for an empty relative path.
    """
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def base_name(path: str) -> str:
    """Return the last element of path, ignoring trailing slashes.

    Returns ``.`` for an empty path and ``/`` for a path made only of
    slashes.
    """
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def extension(name: str) -> str:
    """Return the suffix from the last dot of the final element, or ``""``."""
    for i in range(len(name) - 1, -1, -1):
        if name[i] == "/":
            break
        if name[i] == ".":
            return name[i:]
    return ""


def dir_name(path: str) -> str:
    """Return everything before the final element, cleaned."""
    return clean(path[: path.rfind("/") + 1])


def normalize_path(path: str, file_id: ObjectId) -> tuple[str, str]:
    """Split a user path into display name and storage path.

    Args:
        path: User-supplied path, relative or absolute.
        file_id: Identifier substituted for the file name.

    Returns:
        Tuple of (original_name, storage_path). ``storage_path`` is
        always absolute and ends in ``<id hex><extension>``.
    """
    name = base_name(path)
    directory = dir_name(path)
    storage_path = clean(f"/{directory}/{file_id.hex}{extension(name)}")
    return name, storage_path
