# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Shared pytest fixtures for s3file tests."""

from collections.abc import Iterator

import pytest

from s3file.config import S3Config
from s3file.identifier import ObjectId
from s3file.logging import SecretFilter
from s3file.record import FileRecord, new_file
from tests.vectors import ACCESS_KEY, OBJECT_ID, SAMPLE_PATH, SECRET_KEY


@pytest.fixture(autouse=True)
def _clear_secret_filter() -> Iterator[None]:
    """Keep registered log secrets from leaking between tests."""
    SecretFilter.clear_secrets()
    yield
    SecretFilter.clear_secrets()


@pytest.fixture
def object_id() -> ObjectId:
    """Fixed object id used in golden-value tests."""
    return ObjectId.from_hex(OBJECT_ID)


@pytest.fixture
def sample_record(object_id: ObjectId) -> FileRecord:
    """Private text file with a fixed id and an expiry of 3600."""
    return new_file(
        SAMPLE_PATH, "text/plain", 0, file_id=object_id, expires=3600
    )


@pytest.fixture
def config() -> S3Config:
    """Credentials with the fixed test secret and no region."""
    return S3Config(access_key=ACCESS_KEY, secret_key=SECRET_KEY)
