"""Tests for cloud abstraction interfaces (mock implementations)."""

import asyncio

from vidpress_shared import (
    DEFAULT_PROFILE,
    ObjectNotFoundError,
    ObjectStorage,
    QueueMessage,
    QueueReceiver,
    TranscodeOutcome,
    Transcoder,
)


class MockObjectStorage:
    """In-memory ObjectStorage implementation for testing."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.public: set[tuple[str, str]] = set()

    def download_file(self, bucket: str, key: str, path: str) -> None:
        if (bucket, key) not in self.objects:
            raise ObjectNotFoundError(bucket, key)
        with open(path, "wb") as f:
            f.write(self.objects[(bucket, key)])

    def upload_file(self, bucket: str, key: str, path: str) -> None:
        with open(path, "rb") as f:
            self.objects[(bucket, key)] = f.read()

    def make_public(self, bucket: str, key: str) -> None:
        self.public.add((bucket, key))


class MockQueue:
    """In-memory QueueReceiver seeded with message bodies."""

    def __init__(self, *bodies: str | bytes) -> None:
        self._messages = [QueueMessage(str(i), body) for i, body in enumerate(bodies, 1)]

    def receive(self, max_messages: int = 1) -> list[QueueMessage]:
        return self._messages[:max_messages]

    def delete(self, receipt_handle: str) -> None:
        self._messages = [m for m in self._messages if m.receipt_handle != receipt_handle]


class MockTranscoder:
    async def transform(self, input_path, output_path, profile) -> TranscodeOutcome:
        return TranscodeOutcome.success()


def test_mock_storage_satisfies_protocol(tmp_path) -> None:
    storage = MockObjectStorage()
    assert isinstance(storage, ObjectStorage)
    src = tmp_path / "a.mp4"
    src.write_bytes(b"video")
    storage.upload_file("b", "a.mp4", str(src))
    storage.make_public("b", "a.mp4")
    assert ("b", "a.mp4") in storage.public
    dst = tmp_path / "copy.mp4"
    storage.download_file("b", "a.mp4", str(dst))
    assert dst.read_bytes() == b"video"


def test_object_not_found_error_carries_location() -> None:
    err = ObjectNotFoundError("raw", "missing.mp4")
    assert err.bucket == "raw"
    assert err.key == "missing.mp4"
    assert "raw/missing.mp4" in str(err)


def test_mock_queue_satisfies_protocol() -> None:
    queue = MockQueue('{"name": "a.mp4"}')
    assert isinstance(queue, QueueReceiver)
    [msg] = queue.receive()
    queue.delete(msg.receipt_handle)
    assert queue.receive() == []


def test_mock_transcoder_satisfies_protocol() -> None:
    transcoder = MockTranscoder()
    assert isinstance(transcoder, Transcoder)
    outcome = asyncio.run(transcoder.transform("in", "out", DEFAULT_PROFILE))
    assert outcome.ok is True
