"""
App config from environment with defaults.
Uses pydantic-settings so all env vars are validated and documented in one model.
"""

from __future__ import annotations

import os
from pathlib import Path

import dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkerSettings(BaseSettings):
    """
    All environment variables used by the transcode worker.
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).
    """

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # HTTP trigger
    host: str = "0.0.0.0"
    port: int = 3000

    # Buckets are fixed here and never taken from requests
    raw_bucket_name: str = "320-raw-videos"
    processed_bucket_name: str = "320-processed-videos"

    # Local scratch roots
    raw_video_dir: Path = Path("./raw-videos")
    processed_video_dir: Path = Path("./processed-videos")
    # Prefix scratch filenames with a per-job token so concurrent jobs for one key don't collide
    scratch_unique_names: bool = False

    ffmpeg_binary: str = "ffmpeg"

    # Optional queue trigger (PLATFORM=aws): poll this SQS queue in the background
    transcode_queue_url: str = ""
    queue_poll_interval_sec: float = 5.0

    log_level: str = "INFO"

    @field_validator("port")
    @classmethod
    def check_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError(f"port out of range: {v}")
        return v

    @property
    def queue_enabled(self) -> bool:
        return bool(self.transcode_queue_url.strip())


def get_settings() -> WorkerSettings:
    """Return validated settings from current environment."""
    return WorkerSettings()


def bootstrap_env() -> None:
    """
    Load .env from path in VIDPRESS_ENV_FILE if set.
    Call once at startup before get_settings() so vars from the file are in os.environ.
    """
    path = os.environ.get("VIDPRESS_ENV_FILE")
    if path:
        dotenv.load_dotenv(Path(path).resolve())
