"""Dependencies and app state for FastAPI routes."""

from fastapi import Request
from vidpress_shared import DEFAULT_PROFILE, TranscodeProfile
from vidpress_shared.interfaces import Transcoder

from .config import WorkerSettings, get_settings
from .ffmpeg_transcode import FfmpegTranscoder
from .gateway import RemoteObjectGateway
from .scratch import ScratchStore


def get_worker_settings(request: Request) -> WorkerSettings:
    """Return WorkerSettings from app state or read from env (cached on app state)."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = get_settings()
        request.app.state.settings = settings
    return settings


def build_scratch_store(settings: WorkerSettings) -> ScratchStore:
    scratch = ScratchStore(
        settings.raw_video_dir,
        settings.processed_video_dir,
        unique_names=settings.scratch_unique_names,
    )
    scratch.ensure_directories()
    return scratch


def build_gateway(settings: WorkerSettings) -> RemoteObjectGateway:
    from vidpress_adapters.env_config import object_storage_from_env

    return RemoteObjectGateway(
        object_storage_from_env(),
        inbound_bucket=settings.raw_bucket_name,
        outbound_bucket=settings.processed_bucket_name,
    )


def get_scratch_store(request: Request) -> ScratchStore:
    """Return ScratchStore from app state or build from settings."""
    scratch = getattr(request.app.state, "scratch_store", None)
    if scratch is None:
        scratch = build_scratch_store(get_worker_settings(request))
        request.app.state.scratch_store = scratch
    return scratch


def get_gateway(request: Request) -> RemoteObjectGateway:
    """Return RemoteObjectGateway from app state or build from env (one storage client per process)."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        gateway = build_gateway(get_worker_settings(request))
        request.app.state.gateway = gateway
    return gateway


def get_transcoder(request: Request) -> Transcoder:
    """Return Transcoder from app state or build the ffmpeg adapter."""
    transcoder = getattr(request.app.state, "transcoder", None)
    if transcoder is None:
        transcoder = FfmpegTranscoder(get_worker_settings(request).ffmpeg_binary)
        request.app.state.transcoder = transcoder
    return transcoder


def get_profile(request: Request) -> TranscodeProfile:
    return getattr(request.app.state, "profile", None) or DEFAULT_PROFILE
