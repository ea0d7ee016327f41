"""
Cloud-agnostic interfaces for object storage, queues, and the transcode engine.

Implementations (S3, GCS, SQS, ffmpeg) live in separate packages. Pipeline
logic depends on these interfaces and receives the implementation by config.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from .models import TranscodeOutcome, TranscodeProfile


class ObjectNotFoundError(Exception):
    """Raised by ObjectStorage implementations when bucket/key does not exist."""

    def __init__(self, bucket: str, key: str) -> None:
        super().__init__(f"object not found: {bucket}/{key}")
        self.bucket = bucket
        self.key = key


@runtime_checkable
class ObjectStorage(Protocol):
    """Object storage: blob get/put by key plus public visibility."""

    def download_file(self, bucket: str, key: str, path: str) -> None:
        """Download bucket/key to a local path. Raises ObjectNotFoundError if missing."""
        ...

    def upload_file(self, bucket: str, key: str, path: str) -> None:
        """Upload a local file to bucket/key."""
        ...

    def make_public(self, bucket: str, key: str) -> None:
        """Grant anonymous read on bucket/key."""
        ...


class QueueMessage:
    """A message received from a queue (body + receipt handle for delete)."""

    def __init__(self, receipt_handle: str, body: str | bytes) -> None:
        self.receipt_handle = receipt_handle
        self.body = body


@runtime_checkable
class QueueReceiver(Protocol):
    """Receive and delete messages from a queue."""

    def receive(self, max_messages: int = 1) -> list[QueueMessage]:
        """Receive up to max_messages. Returns empty list if none available."""
        ...

    def delete(self, receipt_handle: str) -> None:
        """Delete a message by its receipt handle after successful processing."""
        ...


@runtime_checkable
class Transcoder(Protocol):
    """Media transformation engine. Settles exactly once per call, never raises."""

    async def transform(
        self,
        input_path: str | Path,
        output_path: str | Path,
        profile: TranscodeProfile,
    ) -> TranscodeOutcome:
        ...
