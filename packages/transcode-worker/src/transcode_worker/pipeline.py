"""
Job pipeline: validate -> fetch -> transcode -> publish, with cleanup on every exit.

Stages run strictly in order; each awaits its external call before the next
starts. Validation failures return before anything is staged. Every later
exit path goes through the single finally block that removes both scratch
files, and cleanup never changes the job outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from vidpress_shared import (
    DEFAULT_PROFILE,
    DirectConvertRequest,
    JobDescriptor,
    JobResult,
    TranscodeProfile,
    is_safe_object_key,
)
from vidpress_shared.interfaces import Transcoder

from .errors import (
    BadRequestError,
    LocalIOFailure,
    TranscodeFailure,
    TranscodeWorkerError,
)
from .gateway import RemoteObjectGateway
from .scratch import ScratchStore

logger = logging.getLogger(__name__)


def validate_descriptor(raw: Any) -> JobDescriptor:
    """
    Extract the source key from a JobDescriptor, a mapping with "name" or
    "source_key", or a bare key string. Raises BadRequestError.
    """
    if isinstance(raw, JobDescriptor):
        key = raw.source_key
    elif isinstance(raw, Mapping):
        key = raw.get("name", raw.get("source_key"))
    else:
        key = raw
    if not isinstance(key, str) or not key:
        raise BadRequestError("Missing filename.")
    if not is_safe_object_key(key):
        raise BadRequestError(f"Invalid filename: {key!r}")
    return JobDescriptor(source_key=key)


async def run_job(
    raw_descriptor: Any,
    *,
    gateway: RemoteObjectGateway,
    transcoder: Transcoder,
    scratch: ScratchStore,
    profile: TranscodeProfile = DEFAULT_PROFILE,
) -> JobResult:
    """Run one job end to end and map the outcome to a JobResult."""
    try:
        job = validate_descriptor(raw_descriptor)
    except BadRequestError as e:
        logger.warning("transcode: rejected: %s", e)
        return JobResult.rejected(str(e))

    key = job.source_key
    try:
        paths = scratch.paths_for(job)
    except LocalIOFailure as e:
        logger.error("transcode: key=%s scratch unavailable: %s", key, e)
        return JobResult.failed(str(e))
    logger.info("transcode: key=%s start", key)
    try:
        await gateway.fetch(key, paths.raw_path)
        logger.info("transcode: key=%s fetched", key)

        outcome = await transcoder.transform(paths.raw_path, paths.processed_path, profile)
        if not outcome.ok:
            raise TranscodeFailure(outcome.message or "transcode failed")
        logger.info("transcode: key=%s converted to %sp", key, profile.target_height)

        await gateway.publish(paths.processed_path, job.output_key)
        logger.info("transcode: key=%s published as %s", key, job.output_key)
    except TranscodeWorkerError as e:
        logger.error("transcode: key=%s failed at %s: %s", key, e.stage, e)
        return JobResult.failed(str(e))
    except Exception as e:
        logger.exception("transcode: key=%s unexpected error: %s", key, e)
        return JobResult.failed(f"unexpected error: {e}")
    finally:
        await scratch.cleanup(paths)

    logger.info("transcode: key=%s done", key)
    return JobResult.accepted(job.output_key)


async def run_direct_conversion(
    request: DirectConvertRequest,
    *,
    transcoder: Transcoder,
    profile: TranscodeProfile = DEFAULT_PROFILE,
) -> JobResult:
    """
    Legacy direct form: transcode between two caller-supplied local paths.

    No storage round-trip and no cleanup; the caller owns both files.
    """
    input_path = Path(request.input_file_path)
    output_path = Path(request.output_file_path)
    logger.info("direct: %s -> %s start", input_path, output_path)
    try:
        outcome = await transcoder.transform(input_path, output_path, profile)
    except Exception as e:
        logger.exception("direct: %s unexpected error: %s", input_path, e)
        return JobResult.failed(f"unexpected error: {e}")
    if not outcome.ok:
        logger.error("direct: %s failed: %s", input_path, outcome.message)
        return JobResult.failed(outcome.message or "transcode failed")
    logger.info("direct: %s done", input_path)
    return JobResult.accepted(str(output_path))
