# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for s3file/urls.py."""

import urllib.parse
from typing import Any
from unittest.mock import patch

import pytest

from s3file.config import S3Config
from s3file.identifier import ObjectId
from s3file.payload import Method
from s3file.record import FileRecord, new_file
from s3file.signing import SigningError
from s3file.urls import (
    URLSigner,
    get_url,
    put_url,
    region_host,
    signed_url,
)
from tests.vectors import (
    ACCESS_KEY,
    GET_SIGNATURE,
    OBJECT_ID,
    SECRET_KEY,
)


def _bad_config() -> S3Config:
    """Config whose secret is a str, which HMAC rejects."""
    secret: Any = "not-bytes"
    return S3Config(access_key="k", secret_key=secret)


def _query(url: str) -> dict[str, list[str]]:
    return urllib.parse.parse_qs(
        urllib.parse.urlsplit(url).query, keep_blank_values=True
    )


class TestRegionHost:
    """Tests for region_host."""

    def test_no_region(self) -> None:
        """Empty region uses the global endpoint."""
        assert region_host("") == "s3.amazonaws.com"

    def test_none_region(self) -> None:
        """None behaves like an empty region."""
        assert region_host(None) == "s3.amazonaws.com"

    def test_region(self) -> None:
        """A region selects the region-qualified endpoint."""
        assert region_host("eu-west-1") == "s3-eu-west-1.amazonaws.com"


class TestSignedUrl:
    """Tests for signed_url, put_url and get_url."""

    def test_put_url(
        self, sample_record: FileRecord, config: S3Config
    ) -> None:
        """PUT URL carries key, expiry and the escaped signature."""
        assert put_url(sample_record, config) == (
            f"https://s3.amazonaws.com/aws3_bucket/abcd/{OBJECT_ID}.txt"
            f"?AWSAccessKeyId={ACCESS_KEY}&Expires=3600"
            "&Signature=e2PHVjwJL7X8zo%2Faw5ARpz9ljF4%3D"
        )

    def test_get_url(
        self, sample_record: FileRecord, config: S3Config
    ) -> None:
        """GET URL signature is escaped with + as %2B."""
        assert get_url(sample_record, config) == (
            f"https://s3.amazonaws.com/aws3_bucket/abcd/{OBJECT_ID}.txt"
            f"?AWSAccessKeyId={ACCESS_KEY}&Expires=3600"
            "&Signature=UrqygIQkXzKhNtldnhMLdY4%2BRMg%3D"
        )

    def test_query_decodes_to_signature(
        self, sample_record: FileRecord, config: S3Config
    ) -> None:
        """Decoded query values are the raw key, expiry and signature."""
        query = _query(get_url(sample_record, config))
        assert query == {
            "AWSAccessKeyId": [ACCESS_KEY],
            "Expires": ["3600"],
            "Signature": [GET_SIGNATURE],
        }

    def test_method_dispatch(
        self, sample_record: FileRecord, config: S3Config
    ) -> None:
        """put_url and get_url delegate with their method."""
        assert signed_url(Method.PUT, sample_record, config) == put_url(
            sample_record, config
        )
        assert signed_url(Method.GET, sample_record, config) == get_url(
            sample_record, config
        )

    def test_region_host_used(self, sample_record: FileRecord) -> None:
        """A configured region changes the host."""
        config = S3Config(
            access_key=ACCESS_KEY,
            secret_key=SECRET_KEY,
            region="ap-southeast-2",
        )
        url = put_url(sample_record, config)
        assert urllib.parse.urlsplit(url).netloc == (
            "s3-ap-southeast-2.amazonaws.com"
        )

    def test_public_record_has_empty_expires(self, config: S3Config) -> None:
        """Public records produce an empty Expires parameter."""
        record = new_file("/a/b.txt", "text/plain", 0, acl="public")
        url = put_url(record, config)
        assert "Expires=&" in url
        assert _query(url)["Expires"] == [""]

    def test_path_escaped(self, config: S3Config) -> None:
        """Unsafe characters in directories are percent-escaped."""
        record = new_file(
            "/my docs/q3 report.pdf",
            "application/pdf",
            0,
            file_id=ObjectId.from_hex(OBJECT_ID),
            expires=10,
        )
        url = get_url(record, config)
        assert urllib.parse.urlsplit(url).path == (
            f"/my%20docs/{OBJECT_ID}.pdf"
        )

    def test_empty_path_returns_empty_string(self, config: S3Config) -> None:
        """A record without a storage path yields no URL and no error."""
        record = FileRecord(
            id=ObjectId.from_hex(OBJECT_ID),
            name="",
            content_type="",
            size=0,
            path="",
        )
        assert put_url(record, config) == ""
        assert get_url(record, config) == ""

    def test_empty_path_skips_signing(self) -> None:
        """The empty-path check happens before the key is used."""
        record = FileRecord(
            id=ObjectId.from_hex(OBJECT_ID),
            name="",
            content_type="",
            size=0,
            path="",
        )
        bad = _bad_config()
        assert put_url(record, bad) == ""

    def test_direct_zero_expires_not_signed_as_zero(
        self, config: S3Config
    ) -> None:
        """A directly built record with expires=0 gets a real expiry."""
        with patch("s3file.record.time.time", return_value=5_000.0):
            record = FileRecord(
                id=ObjectId.from_hex(OBJECT_ID),
                name="a.txt",
                content_type="",
                size=0,
                path="/a.txt",
                expires=0,
            )
        url = get_url(record, config)
        assert _query(url)["Expires"] == ["8600"]

    def test_signing_error_propagates(
        self, sample_record: FileRecord
    ) -> None:
        """Key material errors surface unchanged."""
        bad = _bad_config()
        with pytest.raises(SigningError):
            put_url(sample_record, bad)

    def test_expires_matches_signed_value(
        self, sample_record: FileRecord, config: S3Config
    ) -> None:
        """The Expires parameter equals the expiry that was signed."""
        with patch("s3file.urls.sign", return_value="sig") as mock_sign:
            url = put_url(sample_record, config)
        mock_sign.assert_called_once_with(
            Method.PUT, sample_record, SECRET_KEY
        )
        assert _query(url)["Expires"] == [str(sample_record.expires)]


class TestURLSigner:
    """Tests for URLSigner."""

    def test_delegates_with_config(
        self, sample_record: FileRecord, config: S3Config
    ) -> None:
        """Signer methods match the module functions."""
        signer = URLSigner(config)
        assert signer.config is config
        assert signer.host == "s3.amazonaws.com"
        assert signer.put_url(sample_record) == put_url(sample_record, config)
        assert signer.get_url(sample_record) == get_url(sample_record, config)
        assert signer.signed_url(Method.GET, sample_record) == get_url(
            sample_record, config
        )

    def test_independent_credential_sets(
        self, sample_record: FileRecord
    ) -> None:
        """Two signers with different secrets sign differently."""
        first = URLSigner(S3Config("AKIA1", b"secret-one", "us-west-2"))
        second = URLSigner(S3Config("AKIA2", b"secret-two"))
        first_query = _query(first.get_url(sample_record))
        second_query = _query(second.get_url(sample_record))
        assert first_query["AWSAccessKeyId"] == ["AKIA1"]
        assert second_query["AWSAccessKeyId"] == ["AKIA2"]
        assert first_query["Signature"] != second_query["Signature"]
        assert first.host == "s3-us-west-2.amazonaws.com"
