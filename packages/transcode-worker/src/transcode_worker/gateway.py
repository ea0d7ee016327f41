"""
Remote object gateway: fetch from the raw bucket, publish to the processed bucket.

Bucket names are fixed at construction. The wrapped ObjectStorage is
synchronous, so each call runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from vidpress_shared import ObjectNotFoundError
from vidpress_shared.interfaces import ObjectStorage

from .errors import (
    FetchError,
    PublishUploadError,
    PublishVisibilityError,
    SourceNotFoundError,
)

logger = logging.getLogger(__name__)


class RemoteObjectGateway:
    """Async fetch/publish over an ObjectStorage with fixed inbound and outbound buckets."""

    def __init__(
        self,
        storage: ObjectStorage,
        *,
        inbound_bucket: str,
        outbound_bucket: str,
    ) -> None:
        self.storage = storage
        self.inbound_bucket = inbound_bucket
        self.outbound_bucket = outbound_bucket

    async def fetch(self, key: str, local_path: str | Path) -> None:
        """Download inbound_bucket/key to local_path."""
        logger.debug("gateway: fetch %s/%s -> %s", self.inbound_bucket, key, local_path)
        try:
            await asyncio.to_thread(
                self.storage.download_file, self.inbound_bucket, key, str(local_path)
            )
        except ObjectNotFoundError as e:
            raise SourceNotFoundError(f"{self.inbound_bucket}/{key} does not exist") from e
        except Exception as e:
            raise FetchError(f"download of {self.inbound_bucket}/{key} failed: {e}") from e

    async def publish(self, local_path: str | Path, key: str) -> None:
        """Upload local_path to outbound_bucket/key, then make it publicly readable."""
        logger.debug("gateway: publish %s -> %s/%s", local_path, self.outbound_bucket, key)
        try:
            await asyncio.to_thread(
                self.storage.upload_file, self.outbound_bucket, key, str(local_path)
            )
        except Exception as e:
            raise PublishUploadError(
                f"upload to {self.outbound_bucket}/{key} failed: {e}"
            ) from e
        try:
            await asyncio.to_thread(self.storage.make_public, self.outbound_bucket, key)
        except Exception as e:
            raise PublishVisibilityError(
                f"make public of {self.outbound_bucket}/{key} failed: {e}"
            ) from e
