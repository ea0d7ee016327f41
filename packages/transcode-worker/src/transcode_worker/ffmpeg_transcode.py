"""
FFmpeg-based transcode engine adapter.

Scales to the profile height with the width following the source aspect ratio
(-vf scale=-2:H; -2 keeps the width even, which H.264 requires). Every call
settles exactly once with a TranscodeOutcome and never raises for ffmpeg or
process-level errors.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from vidpress_shared import TranscodeOutcome, TranscodeProfile

logger = logging.getLogger(__name__)

STDERR_TAIL_CHARS = 2000


def build_scale_filter(profile: TranscodeProfile) -> str:
    """Return the ffmpeg video filter for the profile, e.g. scale=-2:360."""
    return f"scale=-2:{profile.target_height}"


def build_ffmpeg_command(
    input_path: str | Path,
    output_path: str | Path,
    profile: TranscodeProfile,
    *,
    ffmpeg_binary: str = "ffmpeg",
) -> list[str]:
    return [
        ffmpeg_binary,
        "-hide_banner",
        "-loglevel",
        "error",
        "-y",
        "-i",
        str(input_path),
        "-vf",
        build_scale_filter(profile),
        str(output_path),
    ]


def _stderr_tail(stderr: bytes | None) -> str:
    text = (stderr or b"").decode("utf-8", errors="ignore").strip()
    return text[-STDERR_TAIL_CHARS:]


class FfmpegTranscoder:
    """Transcoder implementation running ffmpeg as an async subprocess."""

    def __init__(self, ffmpeg_binary: str = "ffmpeg") -> None:
        self.ffmpeg_binary = ffmpeg_binary

    async def transform(
        self,
        input_path: str | Path,
        output_path: str | Path,
        profile: TranscodeProfile,
    ) -> TranscodeOutcome:
        cmd = build_ffmpeg_command(
            input_path, output_path, profile, ffmpeg_binary=self.ffmpeg_binary
        )
        logger.debug("ffmpeg: %s", " ".join(cmd))
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL byte in an argument
            return TranscodeOutcome.failure(f"could not start {self.ffmpeg_binary}: {e}")
        try:
            _, stderr = await process.communicate()
        except asyncio.CancelledError:
            process.kill()
            await process.wait()
            raise
        except OSError as e:
            return TranscodeOutcome.failure(f"ffmpeg I/O error: {e}")
        if process.returncode != 0:
            tail = _stderr_tail(stderr)
            message = f"ffmpeg exited with code {process.returncode}"
            if tail:
                message = f"{message}: {tail}"
            return TranscodeOutcome.failure(message)
        return TranscodeOutcome.success()
