# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Canonical string-to-sign construction for S3 query authentication.

S3 recomputes the string-to-sign server side and compares signatures, so
the element order and count here must match byte for byte::

    GET | "" | ""             | <expires> | <path>
    PUT | "" | <content-type> | <expires> | x-amz-acl:<acl> | <path>

Elements are joined with newlines. The empty second element is the
(unused) Content-MD5.
"""

from enum import StrEnum

from s3file.record import FileRecord


class Method(StrEnum):
    """HTTP methods a signed URL can authorize."""

    GET = "GET"
    PUT = "PUT"


def expires_field(record: FileRecord) -> str:
    """Return the expiry as it appears in the payload and the URL.

    Public objects carry no expiry, so the field is empty.
    """
    if record.is_public:
        return ""
    return str(record.expires)


def acl_header(record: FileRecord) -> str:
    """Return the canonical ``x-amz-acl`` header line."""
    return "x-amz-acl:" + record.acl


def build_payload(method: Method, record: FileRecord) -> list[str]:
    """Build the ordered elements of the string-to-sign.

    Args:
        method: GET or PUT.
        record: Record to sign.

    Returns:
        Five elements for GET, six for PUT (content type and ACL header
        are only part of a PUT signature).
    """
    method = Method(method)
    if method is Method.PUT:
        return [
            method.value,
            "",
            record.content_type,
            expires_field(record),
            acl_header(record),
            record.path,
        ]
    return [
        method.value,
        "",
        "",
        expires_field(record),
        record.path,
    ]


def string_to_sign(method: Method, record: FileRecord) -> str:
    """Join the payload with newlines (no trailing newline)."""
    return "\n".join(build_payload(method, record))
