# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Signed S3 upload and download URLs.

- Object ids and storage path normalization (identifier, paths)
- File records with eagerly resolved defaults (record)
- Canonical string-to-sign and HMAC-SHA1 signatures (payload, signing)
- URL assembly with injected credentials (urls, config)
"""

from s3file.config import ConfigError, S3Config
from s3file.identifier import InvalidIdError, ObjectId
from s3file.paths import normalize_path
from s3file.payload import (
    Method,
    acl_header,
    build_payload,
    expires_field,
    string_to_sign,
)
from s3file.record import (
    ACL_PRIVATE,
    ACL_PUBLIC,
    EXPIRATION_WINDOW,
    FileOptions,
    FileRecord,
    FileRecordError,
    new_file,
)
from s3file.signing import SigningError, sign
from s3file.urls import URLSigner, get_url, put_url, region_host, signed_url


__all__ = [
    # config
    "ConfigError",
    "S3Config",
    # identifier
    "InvalidIdError",
    "ObjectId",
    # paths
    "normalize_path",
    # payload
    "Method",
    "acl_header",
    "build_payload",
    "expires_field",
    "string_to_sign",
    # record
    "ACL_PRIVATE",
    "ACL_PUBLIC",
    "EXPIRATION_WINDOW",
    "FileOptions",
    "FileRecord",
    "FileRecordError",
    "new_file",
    # signing
    "SigningError",
    "sign",
    # urls
    "URLSigner",
    "get_url",
    "put_url",
    "region_host",
    "signed_url",
]
