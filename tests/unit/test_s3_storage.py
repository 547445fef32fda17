"""Tests for S3StorageService against a stubbed boto3 client (no network)."""

import hashlib
import io

import pytest
from botocore.response import StreamingBody
from botocore.stub import Stubber

from docindex.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageNotFoundError,
)
from docindex.infrastructure.external.storage.s3_storage import S3StorageService

BUCKET = "docs"
REF = "documents/doc1/report.pdf"
DATA = b"%PDF-1.4 quarterly numbers"
CHECKSUM = hashlib.sha256(DATA).hexdigest()
KEY_PARAMS = {"Bucket": BUCKET, "Key": REF}


@pytest.fixture
def storage() -> S3StorageService:
    return S3StorageService(BUCKET, region="us-east-1", access_key="test", secret_key="test")


@pytest.fixture
def stubber(storage: S3StorageService):
    with Stubber(storage._s3) as stub:
        yield stub
        stub.assert_no_pending_responses()


async def test_upload_puts_object_with_checksum_metadata(
    storage: S3StorageService, stubber: Stubber
) -> None:
    stubber.add_client_error("head_object", "404", http_status_code=404, expected_params=KEY_PARAMS)
    stubber.add_response(
        "put_object",
        {},
        {
            **KEY_PARAMS,
            "Body": DATA,
            "ContentType": "application/pdf",
            "ServerSideEncryption": "AES256",
            "Metadata": {"sha256": CHECKSUM},
        },
    )

    info = await storage.upload(io.BytesIO(DATA), REF, CHECKSUM, "application/pdf")

    assert info == {"storage_ref": REF, "checksum": CHECKSUM, "size": len(DATA)}


async def test_upload_same_content_is_a_noop(storage: S3StorageService, stubber: Stubber) -> None:
    stubber.add_response(
        "head_object",
        {"ContentLength": len(DATA), "Metadata": {"sha256": CHECKSUM}},
        KEY_PARAMS,
    )

    info = await storage.upload(io.BytesIO(DATA), REF, CHECKSUM, "application/pdf")

    assert info["checksum"] == CHECKSUM
    assert info["size"] == len(DATA)


async def test_upload_different_content_under_same_key(
    storage: S3StorageService, stubber: Stubber
) -> None:
    stubber.add_response(
        "head_object", {"ContentLength": 3, "Metadata": {"sha256": "0" * 64}}, KEY_PARAMS
    )
    with pytest.raises(StorageAlreadyExistsError):
        await storage.upload(io.BytesIO(DATA), REF, CHECKSUM, "application/pdf")


async def test_upload_checksum_mismatch_skips_put(
    storage: S3StorageService, stubber: Stubber
) -> None:
    stubber.add_client_error("head_object", "404", http_status_code=404, expected_params=KEY_PARAMS)
    with pytest.raises(StorageChecksumMismatchError):
        await storage.upload(io.BytesIO(DATA), REF, "f" * 64, "application/pdf")


async def test_download_streams_body_in_chunks(
    storage: S3StorageService, stubber: Stubber
) -> None:
    storage.CHUNK_SIZE = 8
    stubber.add_response(
        "get_object",
        {"Body": StreamingBody(io.BytesIO(DATA), len(DATA)), "ContentLength": len(DATA)},
        KEY_PARAMS,
    )

    chunks = [chunk async for chunk in storage.download(REF)]

    assert b"".join(chunks) == DATA
    assert len(chunks) == -(-len(DATA) // 8)


async def test_download_missing_key_raises_not_found(
    storage: S3StorageService, stubber: Stubber
) -> None:
    stubber.add_client_error("get_object", "NoSuchKey", http_status_code=404, expected_params=KEY_PARAMS)
    with pytest.raises(StorageNotFoundError):
        [chunk async for chunk in storage.download(REF)]


async def test_delete_missing_key_returns_false(
    storage: S3StorageService, stubber: Stubber
) -> None:
    stubber.add_client_error("head_object", "404", http_status_code=404, expected_params=KEY_PARAMS)
    assert await storage.delete(REF) is False


async def test_delete_existing_key(storage: S3StorageService, stubber: Stubber) -> None:
    stubber.add_response("head_object", {"ContentLength": len(DATA)}, KEY_PARAMS)
    stubber.add_response("delete_object", {}, KEY_PARAMS)
    assert await storage.delete(REF) is True


def test_public_url_styles() -> None:
    aws = S3StorageService(BUCKET, region="eu-west-1", access_key="t", secret_key="t")
    assert aws.get_public_url("a b.pdf") == "https://docs.s3.eu-west-1.amazonaws.com/a%20b.pdf"
    minio = S3StorageService(
        BUCKET, endpoint_url="http://minio:9000/", access_key="t", secret_key="t"
    )
    assert minio.get_public_url("x.pdf") == "http://minio:9000/docs/x.pdf"
    cdn = S3StorageService(BUCKET, public_base_url="https://cdn.test/", access_key="t", secret_key="t")
    assert cdn.get_public_url("x.pdf") == "https://cdn.test/x.pdf"
