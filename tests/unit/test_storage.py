import pytest
from botocore.exceptions import ClientError

from docvault.core.config import Settings
from docvault.core.exceptions import StorageError
from docvault.knowledge.ingestion.storage import LocalBlobStore, S3BlobStore, build_blob_store


class StubS3Client:
    def __init__(self, error_code=None):
        self.error_code = error_code
        self.put_requests = []
        self.deleted = []

    def put_object(self, **params):
        self.put_requests.append(params)
        if self.error_code:
            raise ClientError({"Error": {"Code": self.error_code, "Message": "nope"}}, "PutObject")

    def delete_object(self, Bucket, Key):
        self.deleted.append((Bucket, Key))


@pytest.mark.asyncio
async def test_local_store_writes_and_deletes(tmp_path):
    store = LocalBlobStore(tmp_path)

    location = await store.put("report.pdf", b"%PDF", "application/pdf")

    assert (tmp_path / "report.pdf").read_bytes() == b"%PDF"
    assert location.endswith("report.pdf")

    await store.delete("report.pdf")
    assert not (tmp_path / "report.pdf").exists()


@pytest.mark.asyncio
async def test_local_store_overwrite_policy(tmp_path):
    store = LocalBlobStore(tmp_path)
    await store.put("notes.txt", b"one", "text/plain")

    await store.put("notes.txt", b"two", "text/plain", allow_overwrite=True)
    with pytest.raises(StorageError, match="already exists"):
        await store.put("notes.txt", b"three", "text/plain", allow_overwrite=False)

    assert (tmp_path / "notes.txt").read_bytes() == b"two"


@pytest.mark.asyncio
async def test_local_delete_of_missing_key_is_quiet(tmp_path):
    await LocalBlobStore(tmp_path).delete("ghost.pdf")


@pytest.mark.asyncio
async def test_s3_conditional_put():
    client = StubS3Client()
    store = S3BlobStore("cloud", client=client)

    uri = await store.put("a.pdf", b"x", "application/pdf", allow_overwrite=False)

    assert uri == "s3://cloud/a.pdf"
    [request] = client.put_requests
    assert request["IfNoneMatch"] == "*"
    assert request["ContentType"] == "application/pdf"


@pytest.mark.asyncio
async def test_s3_overwrite_put_is_unconditional():
    client = StubS3Client()

    await S3BlobStore("cloud", client=client).put("a.pdf", b"x", "application/pdf")

    assert "IfNoneMatch" not in client.put_requests[0]


@pytest.mark.asyncio
@pytest.mark.parametrize("code, message", [("PreconditionFailed", "already exists"), ("AccessDenied", "S3 upload failed")])
async def test_s3_errors_become_storage_errors(code, message):
    store = S3BlobStore("cloud", client=StubS3Client(error_code=code))

    with pytest.raises(StorageError, match=message):
        await store.put("a.pdf", b"x", "application/pdf", allow_overwrite=False)


def test_build_blob_store_defaults_to_local(tmp_path):
    store = build_blob_store(Settings(STORAGE_BACKEND="local", LOCAL_STORAGE_PATH=tmp_path))

    assert isinstance(store, LocalBlobStore)
    assert store.root == tmp_path
