"""
Local scratch storage: raw and processed staging directories.

Filenames come from object keys. The same key used by two concurrent jobs maps
to the same scratch file unless unique_names is enabled.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path

from vidpress_shared import JobDescriptor, ScratchPaths

from .errors import LocalIOFailure

logger = logging.getLogger(__name__)


class ScratchStore:
    """Raw and processed staging directories with delete-if-present cleanup."""

    def __init__(
        self,
        raw_dir: str | Path,
        processed_dir: str | Path,
        *,
        unique_names: bool = False,
    ) -> None:
        self.raw_dir = Path(raw_dir)
        self.processed_dir = Path(processed_dir)
        self.unique_names = unique_names

    def ensure_directories(self) -> None:
        """Create both directories (and parents). Safe to call repeatedly."""
        for directory in (self.raw_dir, self.processed_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LocalIOFailure(f"cannot create scratch dir {directory}: {e}") from e

    def raw_path(self, name: str) -> Path:
        return self.raw_dir / name

    def processed_path(self, name: str) -> Path:
        return self.processed_dir / name

    def paths_for(self, job: JobDescriptor) -> ScratchPaths:
        """Derive the job's scratch paths, creating the directories if needed."""
        self.ensure_directories()
        raw_name = job.source_key
        processed_name = job.output_key
        if self.unique_names:
            token = uuid.uuid4().hex[:12]
            raw_name = f"{token}-{raw_name}"
            processed_name = f"{token}-{processed_name}"
        return ScratchPaths(
            raw_path=self.raw_path(raw_name),
            processed_path=self.processed_path(processed_name),
        )

    async def delete_if_present(self, path: str | Path) -> None:
        """Delete path if it exists. Never raises: a missing file is already satisfied."""
        await asyncio.to_thread(_unlink_quietly, Path(path))

    async def cleanup(self, paths: ScratchPaths) -> None:
        """Delete both scratch files concurrently."""
        await asyncio.gather(
            self.delete_if_present(paths.raw_path),
            self.delete_if_present(paths.processed_path),
        )


def _unlink_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("scratch: delete %s failed: %s", path, e)
        return
    logger.debug("scratch: removed %s", path.name)
