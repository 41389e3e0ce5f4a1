# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""HMAC-SHA1 signatures for S3 query string authentication."""

import base64
import hashlib
import hmac
import logging

from s3file.payload import Method, string_to_sign
from s3file.record import FileRecord


logger = logging.getLogger(__name__)


class SigningError(Exception):
    """Raised when the secret key cannot be used for HMAC.

    Indicates broken configuration (e.g. the secret is not bytes), not a
    transient failure.
    """


def _hmac_sha1(key: bytes, msg: str) -> bytes:
    """HMAC-SHA1 helper."""
    try:
        return hmac.new(key, msg.encode("utf-8"), hashlib.sha1).digest()
    except (TypeError, ValueError) as e:
        raise SigningError(f"Invalid secret key material: {e}") from e


def sign(method: Method, record: FileRecord, secret_key: bytes) -> str:
    """Sign a record for the given method.

    Args:
        method: GET or PUT.
        record: Record to sign.
        secret_key: Raw secret access key.

    Returns:
        Base64 (standard alphabet, padded) of the HMAC-SHA1 digest.

    Raises:
        SigningError: If the secret key is rejected by HMAC.
    """
    digest = _hmac_sha1(secret_key, string_to_sign(method, record))
    logger.debug("Signed %s %s", method, record.path)
    return base64.b64encode(digest).decode("ascii")
