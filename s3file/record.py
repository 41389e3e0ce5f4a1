# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""File records and their construction.

A ``FileRecord`` describes one stored object together with the access
policy its signed URLs carry. Records are frozen: every default,
including the expiry timestamp, is resolved when the record is built, so
signing a record never changes it.

Usage:
    from s3file.record import new_file

    record = new_file("/uploads/report.pdf", "application/pdf", 1024)
    record = new_file("avatar.png", "image/png", 512, acl="public")
"""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any

from s3file.identifier import ObjectId
from s3file.paths import normalize_path


logger = logging.getLogger(__name__)

#: Seconds a signature stays valid when no explicit expiry is given.
EXPIRATION_WINDOW = 3600

ACL_PRIVATE = "private"
ACL_PUBLIC = "public"

#: Accepted access-control values (S3 canned ACLs plus ``public``).
KNOWN_ACLS = frozenset(
    {
        ACL_PRIVATE,
        ACL_PUBLIC,
        "public-read",
        "public-read-write",
        "authenticated-read",
        "aws-exec-read",
        "bucket-owner-read",
        "bucket-owner-full-control",
    }
)


class FileRecordError(ValueError):
    """Raised when a file record is configured with invalid options."""


def default_expires() -> int:
    """Return the default expiry: now plus ``EXPIRATION_WINDOW``."""
    return int(time.time()) + EXPIRATION_WINDOW


def _check_acl(acl: str) -> None:
    if acl not in KNOWN_ACLS:
        raise FileRecordError(
            f"Unknown ACL {acl!r}; expected one of "
            f"{', '.join(sorted(KNOWN_ACLS))}"
        )


def _check_expires(expires: int) -> None:
    if expires < 0:
        raise FileRecordError(
            f"Expires must be a non-negative timestamp: {expires}"
        )


@dataclass(frozen=True)
class FileOptions:
    """Overrides applied to a record at construction time.

    Any field left as ``None`` keeps the default.

    Attributes:
        acl: Access-control setting (default ``private``).
        expires: Unix seconds after which signatures expire. ``0`` means
            "use the default window".
        file_id: Fixed object id, mainly for deterministic tests.
        bucket: Informational bucket label.
    """

    acl: str | None = None
    expires: int | None = None
    file_id: ObjectId | None = None
    bucket: str | None = None

    def __post_init__(self) -> None:
        """Validate option values.

        Raises:
            FileRecordError: If an option is out of range.
        """
        if self.acl is not None:
            _check_acl(self.acl)
        if self.expires is not None:
            _check_expires(self.expires)
        if self.file_id is not None and not isinstance(
            self.file_id, ObjectId
        ):
            raise FileRecordError(
                f"file_id must be an ObjectId, got "
                f"{type(self.file_id).__name__}"
            )


@dataclass(frozen=True)
class FileRecord:
    """One stored object and its access policy.

    Attributes:
        id: Unique object id, used as the storage file name.
        name: Original file name, for display only.
        content_type: MIME type; empty when not set.
        size: Byte length (informational).
        path: Absolute storage key derived from id and original path.
        bucket: Informational bucket label.
        acl: Access-control setting.
        expires: Unix seconds after which signatures expire.
    """

    id: ObjectId
    name: str
    content_type: str
    size: int
    path: str
    bucket: str = ""
    acl: str = ACL_PRIVATE
    expires: int = field(default_factory=default_expires)

    def __post_init__(self) -> None:
        """Validate the ACL and resolve a zero expiry.

        Raises:
            FileRecordError: If the ACL is unknown or expires is negative.
        """
        _check_acl(self.acl)
        _check_expires(self.expires)
        if self.expires == 0:
            object.__setattr__(self, "expires", default_expires())

    @property
    def is_public(self) -> bool:
        return self.acl == ACL_PUBLIC

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON-facing form (the id is not exposed)."""
        return {
            "name": self.name,
            "type": self.content_type,
            "size": self.size,
            "path": self.path,
            "bucket": self.bucket,
            "acl": self.acl,
            "expires": self.expires,
        }


def new_file(
    path: str,
    content_type: str,
    size: int,
    options: FileOptions | None = None,
    **overrides: Any,
) -> FileRecord:
    """Build a record for the object at ``path``.

    Defaults are applied first, then ``options``, then keyword
    ``overrides`` (same names as ``FileOptions`` fields). The storage path
    is derived last, from the final object id.

    Args:
        path: User-supplied path of the object.
        content_type: MIME type, may be empty.
        size: Byte length.
        options: Optional overrides.
        **overrides: Individual ``FileOptions`` fields.

    Returns:
        A fully resolved FileRecord.

    Raises:
        FileRecordError: If an override is unknown or invalid.
    """
    if options is None:
        options = FileOptions()
    if overrides:
        try:
            options = replace(options, **overrides)
        except TypeError as e:
            raise FileRecordError(f"Invalid file option: {e}") from e

    file_id = options.file_id if options.file_id is not None else ObjectId()
    expires = options.expires or default_expires()
    name, storage_path = normalize_path(path, file_id)

    record = FileRecord(
        id=file_id,
        name=name,
        content_type=content_type,
        size=size,
        path=storage_path,
        bucket=options.bucket or "",
        acl=options.acl or ACL_PRIVATE,
        expires=expires,
    )
    logger.debug("New file record %s at %s", file_id, storage_path)
    return record
