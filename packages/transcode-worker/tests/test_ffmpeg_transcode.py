"""Tests for the ffmpeg adapter: command building and single-settlement outcomes."""

import asyncio
import shutil
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from vidpress_shared import DEFAULT_PROFILE, TranscodeProfile

from transcode_worker.ffmpeg_transcode import (
    FfmpegTranscoder,
    build_ffmpeg_command,
    build_scale_filter,
)


def test_scale_filter_keeps_aspect() -> None:
    assert build_scale_filter(DEFAULT_PROFILE) == "scale=-2:360"
    assert build_scale_filter(TranscodeProfile(target_height=720)) == "scale=-2:720"


def test_build_command_passes_paths_through() -> None:
    cmd = build_ffmpeg_command("/raw/a.mp4", "/processed/processed-a.mp4", DEFAULT_PROFILE)
    assert cmd[0] == "ffmpeg"
    assert cmd[cmd.index("-i") + 1] == "/raw/a.mp4"
    assert cmd[cmd.index("-vf") + 1] == "scale=-2:360"
    assert cmd[-1] == "/processed/processed-a.mp4"
    assert "-y" in cmd


def _process(returncode: int, stderr: bytes = b"") -> MagicMock:
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(None, stderr))
    return process


def test_transform_success() -> None:
    with patch(
        "transcode_worker.ffmpeg_transcode.asyncio.create_subprocess_exec",
        AsyncMock(return_value=_process(0)),
    ) as mock_exec:
        outcome = asyncio.run(FfmpegTranscoder().transform("in.mp4", "out.mp4", DEFAULT_PROFILE))
    assert outcome.ok is True
    assert mock_exec.call_args[0][0] == "ffmpeg"


def test_transform_nonzero_exit_reports_stderr_tail() -> None:
    with patch(
        "transcode_worker.ffmpeg_transcode.asyncio.create_subprocess_exec",
        AsyncMock(return_value=_process(1, b"in.mp4: Invalid data found when processing input\n")),
    ):
        outcome = asyncio.run(FfmpegTranscoder().transform("in.mp4", "out.mp4", DEFAULT_PROFILE))
    assert outcome.ok is False
    assert outcome.message.startswith("ffmpeg exited with code 1")
    assert "Invalid data found" in outcome.message


def test_transform_missing_binary_settles_as_failure() -> None:
    transcoder = FfmpegTranscoder("/nonexistent/ffmpeg-binary")
    outcome = asyncio.run(transcoder.transform("in.mp4", "out.mp4", DEFAULT_PROFILE))
    assert outcome.ok is False
    assert "could not start" in outcome.message


@pytest.mark.skipif(shutil.which("false") is None, reason="needs coreutils false")
def test_transform_real_process_failure() -> None:
    outcome = asyncio.run(
        FfmpegTranscoder(shutil.which("false")).transform("in.mp4", "out.mp4", DEFAULT_PROFILE)
    )
    assert outcome.ok is False
    assert outcome.message == "ffmpeg exited with code 1"


@pytest.mark.skipif(shutil.which("true") is None, reason="needs coreutils true")
def test_transform_real_process_success() -> None:
    outcome = asyncio.run(
        FfmpegTranscoder(shutil.which("true")).transform("in.mp4", "out.mp4", DEFAULT_PROFILE)
    )
    assert outcome.ok is True


def test_transform_nul_byte_path_settles_as_failure() -> None:
    outcome = asyncio.run(FfmpegTranscoder().transform("in\x00.mp4", "out.mp4", DEFAULT_PROFILE))
    assert outcome.ok is False
    assert outcome.message.startswith("could not start ffmpeg")
