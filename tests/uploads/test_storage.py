"""Tests for app/uploads/storage.py - Cloud Storage wrapper."""

import io
from unittest.mock import MagicMock, patch

import pytest
from google.api_core.exceptions import Forbidden, GoogleAPIError, NotFound

from app.uploads.exceptions import StorageError
from app.uploads.storage import (
    UPLOAD_CHUNK_SIZE,
    StorageService,
    get_storage_service,
)

BUCKET = "labsy-prod.appspot.com"
BASE = f"https://storage.googleapis.com/{BUCKET}"


@pytest.fixture(name="bucket")
def bucket_fixture():
    bucket = MagicMock()
    bucket.name = BUCKET
    return bucket


@pytest.fixture(name="storage")
def storage_fixture(bucket):
    return StorageService(bucket)


def test_upload_streams_and_publishes(storage, bucket):
    blob = bucket.blob.return_value
    data = io.BytesIO(b"png-bytes")

    result = storage.upload(
        data, "designs/u1/a.png", "image/png", cache_control="public, max-age=60"
    )

    bucket.blob.assert_called_once_with(
        "designs/u1/a.png", chunk_size=UPLOAD_CHUNK_SIZE
    )
    blob.upload_from_file.assert_called_once_with(
        data, content_type="image/png", rewind=True
    )
    blob.make_public.assert_called_once()
    assert blob.cache_control == "public, max-age=60"
    assert result.url == f"{BASE}/designs/u1/a.png"
    assert result.file_name == "designs/u1/a.png"
    assert result.bucket == BUCKET


def test_upload_private_object(storage, bucket):
    storage.upload(io.BytesIO(b"x"), "a.pdf", "application/pdf", public=False)

    bucket.blob.return_value.make_public.assert_not_called()


def test_upload_failure_raises_storage_error(storage, bucket):
    bucket.blob.return_value.upload_from_file.side_effect = GoogleAPIError("boom")

    with pytest.raises(StorageError):
        storage.upload(io.BytesIO(b"x"), "a.png", "image/png")


def test_path_from_url(storage):
    assert storage.path_from_url(f"{BASE}/profiles/u1/a.png") == "profiles/u1/a.png"
    assert storage.path_from_url(f"{BASE}/") is None
    assert storage.path_from_url("https://example.com/a.png") is None


def test_delete_missing_object_is_ignored(storage, bucket):
    bucket.blob.return_value.delete.side_effect = NotFound("gone")

    storage.delete("profiles/u1/a.png")


def test_delete_failure_raises(storage, bucket):
    bucket.blob.return_value.delete.side_effect = Forbidden("denied")

    with pytest.raises(StorageError):
        storage.delete("profiles/u1/a.png")


def test_delete_by_url_swallows_failures(storage, bucket):
    bucket.blob.return_value.delete.side_effect = Forbidden("denied")

    storage.delete_by_url(f"{BASE}/profiles/u1/a.png")

    bucket.blob.assert_called_once_with("profiles/u1/a.png")


@pytest.mark.parametrize("url", [None, "", "https://cdn.example.com/a.png"])
def test_delete_by_url_ignores_foreign_urls(storage, bucket, url):
    storage.delete_by_url(url)

    bucket.blob.assert_not_called()


def test_get_storage_service_uses_default_bucket(bucket):
    get_storage_service.cache_clear()
    try:
        with patch(
            "app.uploads.storage.firebase_storage.bucket", return_value=bucket
        ) as mock_bucket:
            service = get_storage_service()
            assert get_storage_service() is service
        mock_bucket.assert_called_once_with()
        assert service.bucket_name == BUCKET
    finally:
        get_storage_service.cache_clear()
