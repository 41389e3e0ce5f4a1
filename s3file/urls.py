# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Signed URL assembly.

Combines a record's signature with the access key and expiry into a URL
of the form::

    https://<host><path>?AWSAccessKeyId=<key>&Expires=<epoch>&Signature=<b64>

The ``Expires`` query value and the expiry inside the signature are
both derived from the same frozen record, so they always agree.
"""

import logging
import urllib.parse

from s3file.config import S3Config
from s3file.payload import Method, expires_field
from s3file.record import FileRecord
from s3file.signing import sign


logger = logging.getLogger(__name__)

_DEFAULT_HOST = "s3.amazonaws.com"

# Characters left unescaped in the URL path (RFC 3986 sub-delims and ":@/")
_PATH_SAFE = "/$&+,:;=@"


def region_host(region: str | None) -> str:
    """Return the S3 endpoint host for a region.

    Args:
        region: Region name; empty or None for the global endpoint.

    Returns:
        ``s3.amazonaws.com`` or ``s3-<region>.amazonaws.com``.
    """
    if not region:
        return _DEFAULT_HOST
    return f"s3-{region}.amazonaws.com"


def _encode_query(params: dict[str, str]) -> str:
    """Form-encode params sorted by key (space as ``+``, ``/`` escaped)."""
    return urllib.parse.urlencode(sorted(params.items()))


def signed_url(method: Method, record: FileRecord, config: S3Config) -> str:
    """Build a signed URL for ``record``.

    Args:
        method: GET or PUT.
        record: Record to authorize.
        config: Credentials and region.

    Returns:
        The signed URL, or ``""`` when the record has no storage path.

    Raises:
        SigningError: If the secret key is unusable.
    """
    if not record.path:
        return ""

    expires = expires_field(record)
    signature = sign(method, record, config.secret_key)

    query = _encode_query(
        {
            "AWSAccessKeyId": config.access_key,
            "Expires": expires,
            "Signature": signature,
        }
    )
    host = region_host(config.region)
    path = urllib.parse.quote(record.path, safe=_PATH_SAFE)
    logger.debug("Signed %s URL for %s on %s", method, record.path, host)
    return f"https://{host}{path}?{query}"


def put_url(record: FileRecord, config: S3Config) -> str:
    """Signed upload URL."""
    return signed_url(Method.PUT, record, config)


def get_url(record: FileRecord, config: S3Config) -> str:
    """Signed download URL."""
    return signed_url(Method.GET, record, config)


class URLSigner:
    """Signs URLs with one injected configuration.

    Example:
        signer = URLSigner(S3Config.from_env())
        upload = signer.put_url(new_file("a/b.txt", "text/plain", 10))
    """

    def __init__(self, config: S3Config) -> None:
        self._config = config

    @property
    def config(self) -> S3Config:
        return self._config

    @property
    def host(self) -> str:
        return region_host(self._config.region)

    def signed_url(self, method: Method, record: FileRecord) -> str:
        return signed_url(method, record, self._config)

    def put_url(self, record: FileRecord) -> str:
        return put_url(record, self._config)

    def get_url(self, record: FileRecord) -> str:
        return get_url(record, self._config)
