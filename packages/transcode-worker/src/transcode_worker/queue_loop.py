"""
Queue trigger: poll a queue for job notifications and run each through the pipeline.

A message is deleted when its job is accepted or rejected (malformed messages
would never succeed); on failure it is left for the queue to redeliver.
"""

from __future__ import annotations

import asyncio
import logging

from vidpress_shared import DEFAULT_PROFILE, DirectConvertRequest, JobResultStatus, TranscodeProfile
from vidpress_shared.interfaces import QueueReceiver, Transcoder

from .errors import BadRequestError
from .gateway import RemoteObjectGateway
from .pipeline import run_job
from .scratch import ScratchStore
from .trigger import decode_queue_body

logger = logging.getLogger(__name__)


async def process_one_queue_message(
    body: str | bytes,
    *,
    gateway: RemoteObjectGateway,
    transcoder: Transcoder,
    scratch: ScratchStore,
    profile: TranscodeProfile = DEFAULT_PROFILE,
) -> bool:
    """
    Process a single queue message body.

    Returns True if the message should be deleted, False to leave it for redelivery.
    """
    try:
        request = decode_queue_body(body)
    except BadRequestError as e:
        logger.warning("queue: invalid message body: %s", e)
        return True
    if isinstance(request, DirectConvertRequest):
        logger.warning("queue: direct path conversion is only accepted over HTTP, dropping")
        return True
    result = await run_job(
        request, gateway=gateway, transcoder=transcoder, scratch=scratch, profile=profile
    )
    if result.status == JobResultStatus.REJECTED:
        logger.error(
            "queue: key=%r rejected, dropping message: %s",
            getattr(request, "source_key", request),
            result.reason,
        )
    return result.status != JobResultStatus.FAILED


async def run_transcode_loop(
    receiver: QueueReceiver,
    *,
    gateway: RemoteObjectGateway,
    transcoder: Transcoder,
    scratch: ScratchStore,
    profile: TranscodeProfile = DEFAULT_PROFILE,
    poll_interval_sec: float = 5.0,
) -> None:
    """Long-running loop: receive, process, delete on success. Runs until cancelled."""
    logger.info("queue: transcode loop started")
    while True:
        try:
            messages = await asyncio.to_thread(receiver.receive, 1)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("queue: receive failed: %s", e)
            await asyncio.sleep(poll_interval_sec)
            continue
        for msg in messages:
            try:
                ok = await process_one_queue_message(
                    msg.body,
                    gateway=gateway,
                    transcoder=transcoder,
                    scratch=scratch,
                    profile=profile,
                )
                if ok:
                    await asyncio.to_thread(receiver.delete, msg.receipt_handle)
            except Exception as e:
                logger.exception("queue: failed to process message: %s", e)
                # Message will become visible again after visibility timeout
        if not messages:
            await asyncio.sleep(poll_interval_sec)
