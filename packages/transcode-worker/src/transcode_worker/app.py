"""FastAPI app: HTTP trigger for transcode jobs plus the optional queue loop."""

import asyncio
import contextlib
import json
import logging
from collections.abc import AsyncIterator

from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse
from vidpress_shared import (
    DirectConvertRequest,
    JobResult,
    JobResultStatus,
    TranscodeProfile,
    configure_logging,
)
from vidpress_shared.interfaces import Transcoder

from .config import bootstrap_env, get_settings
from .deps import (
    build_gateway,
    build_scratch_store,
    get_gateway,
    get_profile,
    get_scratch_store,
    get_transcoder,
)
from .errors import BadRequestError
from .ffmpeg_transcode import FfmpegTranscoder
from .gateway import RemoteObjectGateway
from .pipeline import run_direct_conversion, run_job
from .queue_loop import run_transcode_loop
from .scratch import ScratchStore
from .trigger import decode_job_request

# Load .env from VIDPRESS_ENV_FILE if set. Unset in deployed containers.
bootstrap_env()
configure_logging(get_settings().log_level)
logger = logging.getLogger(__name__)

SUCCESS_TEXT = "Processing finished successfully."


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build collaborators once per process; start the queue loop when configured."""
    settings = getattr(app.state, "settings", None) or get_settings()
    app.state.settings = settings
    if getattr(app.state, "scratch_store", None) is None:
        app.state.scratch_store = build_scratch_store(settings)
    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = build_gateway(settings)
    if getattr(app.state, "transcoder", None) is None:
        app.state.transcoder = FfmpegTranscoder(settings.ffmpeg_binary)
    logger.info(
        "transcode-worker starting; raw_bucket=%s processed_bucket=%s",
        settings.raw_bucket_name,
        settings.processed_bucket_name,
    )

    loop_task: asyncio.Task | None = None
    if settings.queue_enabled:
        from vidpress_adapters.env_config import queue_receiver_from_env

        receiver = queue_receiver_from_env(settings.transcode_queue_url)
        loop_task = asyncio.create_task(
            run_transcode_loop(
                receiver,
                gateway=app.state.gateway,
                transcoder=app.state.transcoder,
                scratch=app.state.scratch_store,
                poll_interval_sec=settings.queue_poll_interval_sec,
            ),
            name="transcode-queue-loop",
        )
    else:
        logger.info("queue loop skipped (TRANSCODE_QUEUE_URL not set)")
    try:
        yield
    finally:
        if loop_task is not None:
            loop_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await loop_task


app = FastAPI(title="vidpress transcode worker", version="0.1.0", lifespan=lifespan)


def result_response(result: JobResult) -> PlainTextResponse:
    """Map a JobResult to the HTTP response contract (200 / 400 / 500, plain text)."""
    if result.status == JobResultStatus.ACCEPTED:
        return PlainTextResponse(SUCCESS_TEXT, status_code=200)
    if result.status == JobResultStatus.REJECTED:
        return PlainTextResponse(f"Bad Request: {result.reason}", status_code=400)
    return PlainTextResponse(f"Internal Server Error: {result.reason}", status_code=500)


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.post("/process-video", response_class=PlainTextResponse)
async def process_video(
    request: Request,
    gateway: RemoteObjectGateway = Depends(get_gateway),
    transcoder: Transcoder = Depends(get_transcoder),
    scratch: ScratchStore = Depends(get_scratch_store),
    profile: TranscodeProfile = Depends(get_profile),
) -> PlainTextResponse:
    """Run one transcode job from a push notification, direct key, or direct paths."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return result_response(JobResult.rejected("Request body is not valid JSON"))
    try:
        trigger = decode_job_request(body)
    except BadRequestError as e:
        logger.warning("process-video: bad request: %s", e)
        return result_response(JobResult.rejected(str(e)))

    if isinstance(trigger, DirectConvertRequest):
        result = await run_direct_conversion(trigger, transcoder=transcoder, profile=profile)
    else:
        result = await run_job(
            trigger, gateway=gateway, transcoder=transcoder, scratch=scratch, profile=profile
        )
    return result_response(result)
