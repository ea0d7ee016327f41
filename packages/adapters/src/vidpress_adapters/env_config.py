"""
Platform adapter facade: build adapter instances from env by PLATFORM (gcp | aws).

Reads PLATFORM (default "gcp") and builds the matching ObjectStorage and, on
aws, the SQS receiver for the transcode queue. Apps import from this module so
the implementation choice lives in one place.

Optional env vars:
- PLATFORM: gcp (default) or aws
- GOOGLE_CLOUD_PROJECT: project for the GCS client (default: from credentials)
- AWS_REGION (default: from boto3 config)
- AWS_ENDPOINT_URL (e.g. for LocalStack)
- SQS_LONG_POLL_WAIT_SECONDS (default: 20, max 20) for receive long polling
- SQS_VISIBILITY_TIMEOUT_SECONDS: per-receive visibility timeout (default: queue setting)
"""

import os

from vidpress_shared.interfaces import ObjectStorage, QueueReceiver

SUPPORTED_PLATFORMS = ("gcp", "aws")


def _platform() -> str:
    """Return PLATFORM env (gcp | aws), default gcp."""
    return (os.environ.get("PLATFORM", "gcp") or "gcp").strip().lower()


def _require_supported() -> str:
    platform = _platform()
    if platform not in SUPPORTED_PLATFORMS:
        raise NotImplementedError(
            f"PLATFORM={platform!r} is not implemented; supported: {', '.join(SUPPORTED_PLATFORMS)}"
        )
    return platform


def _sqs_wait_time_seconds() -> int:
    """Long-poll wait time for SQS receive (0-20). Default 20 for responsive pickup."""
    val = os.environ.get("SQS_LONG_POLL_WAIT_SECONDS", "20")
    return min(20, max(0, int(val)))


def _sqs_visibility_timeout() -> int | None:
    val = os.environ.get("SQS_VISIBILITY_TIMEOUT_SECONDS")
    return int(val) if val else None


def _get_region() -> str | None:
    return os.environ.get("AWS_REGION") or None


def _get_endpoint_url() -> str | None:
    return os.environ.get("AWS_ENDPOINT_URL") or None


def object_storage_from_env() -> ObjectStorage:
    """Build the ObjectStorage for the configured platform."""
    if _require_supported() == "aws":
        from .s3_storage import S3ObjectStorage

        return S3ObjectStorage(
            region_name=_get_region(),
            endpoint_url=_get_endpoint_url(),
        )
    from .gcs_storage import GCSObjectStorage

    return GCSObjectStorage(project=os.environ.get("GOOGLE_CLOUD_PROJECT") or None)


def queue_receiver_from_env(queue_url: str) -> QueueReceiver:
    """Build a QueueReceiver for queue_url. Only aws (SQS) is supported."""
    platform = _require_supported()
    if platform != "aws":
        raise NotImplementedError(
            f"queue polling is not implemented for PLATFORM={platform!r}; "
            "use push delivery to POST /process-video instead"
        )
    from .sqs_queues import SQSQueueReceiver

    return SQSQueueReceiver(
        queue_url,
        region_name=_get_region(),
        endpoint_url=_get_endpoint_url(),
        wait_time_seconds=_sqs_wait_time_seconds(),
        visibility_timeout=_sqs_visibility_timeout(),
    )
