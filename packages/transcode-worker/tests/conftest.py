"""Pytest fixtures: in-memory object storage, fake transcoder, tmp scratch dirs."""

from pathlib import Path

import pytest
from vidpress_shared import ObjectNotFoundError, TranscodeOutcome

from transcode_worker.gateway import RemoteObjectGateway
from transcode_worker.scratch import ScratchStore

RAW_BUCKET = "test-raw-videos"
PROCESSED_BUCKET = "test-processed-videos"


class FakeObjectStorage:
    """ObjectStorage for tests: in-memory objects, records every call in order."""

    def __init__(self, calls: list) -> None:
        self.calls = calls
        self.objects: dict[tuple[str, str], bytes] = {}
        self.public: set[tuple[str, str]] = set()
        self.fail_on: dict[str, Exception] = {}
        self.partial_download = False

    def download_file(self, bucket: str, key: str, path: str) -> None:
        self.calls.append(("fetch", bucket, key))
        if self.partial_download:
            Path(path).write_bytes(b"partial")
        if "download_file" in self.fail_on:
            raise self.fail_on["download_file"]
        if (bucket, key) not in self.objects:
            raise ObjectNotFoundError(bucket, key)
        Path(path).write_bytes(self.objects[(bucket, key)])

    def upload_file(self, bucket: str, key: str, path: str) -> None:
        self.calls.append(("upload", bucket, key))
        if "upload_file" in self.fail_on:
            raise self.fail_on["upload_file"]
        self.objects[(bucket, key)] = Path(path).read_bytes()

    def make_public(self, bucket: str, key: str) -> None:
        self.calls.append(("make_public", bucket, key))
        if "make_public" in self.fail_on:
            raise self.fail_on["make_public"]
        self.public.add((bucket, key))


class FakeTranscoder:
    """Transcoder for tests: writes a marked copy of the input, or fails with a message."""

    def __init__(self, calls: list) -> None:
        self.calls = calls
        self.ok = True
        self.message = "ffmpeg exited with code 1: Invalid data found"
        self.profiles: list = []

    async def transform(self, input_path, output_path, profile) -> TranscodeOutcome:
        self.calls.append(("transcode", Path(input_path).name, Path(output_path).name))
        self.profiles.append(profile)
        if not self.ok:
            Path(output_path).write_bytes(b"truncated")
            return TranscodeOutcome.failure(self.message)
        Path(output_path).write_bytes(b"360p:" + Path(input_path).read_bytes())
        return TranscodeOutcome.success()


@pytest.fixture
def calls() -> list:
    return []


@pytest.fixture
def storage(calls: list) -> FakeObjectStorage:
    s = FakeObjectStorage(calls)
    s.objects[(RAW_BUCKET, "clip1.mp4")] = b"raw video bytes"
    return s


@pytest.fixture
def transcoder(calls: list) -> FakeTranscoder:
    return FakeTranscoder(calls)


@pytest.fixture
def scratch(tmp_path: Path) -> ScratchStore:
    return ScratchStore(tmp_path / "raw-videos", tmp_path / "processed-videos")


@pytest.fixture
def gateway(storage: FakeObjectStorage) -> RemoteObjectGateway:
    return RemoteObjectGateway(storage, inbound_bucket=RAW_BUCKET, outbound_bucket=PROCESSED_BUCKET)


def scratch_files(scratch: ScratchStore) -> list[Path]:
    """All files left in both scratch directories."""
    found: list[Path] = []
    for directory in (scratch.raw_dir, scratch.processed_dir):
        if directory.exists():
            found.extend(directory.iterdir())
    return found


@pytest.fixture
def leftover_files():
    return scratch_files
