"""Shared types and conventions for the vidpress transcoding service."""

from .interfaces import (
    ObjectNotFoundError,
    ObjectStorage,
    QueueMessage,
    QueueReceiver,
    Transcoder,
)
from .keys import OUTPUT_KEY_PREFIX, build_output_key, is_safe_object_key
from .logging_config import configure_logging
from .models import (
    DEFAULT_PROFILE,
    DirectConvertRequest,
    JobDescriptor,
    JobResult,
    JobResultStatus,
    PubSubEnvelope,
    PubSubMessage,
    ScratchPaths,
    StorageObjectNotification,
    TranscodeOutcome,
    TranscodeProfile,
)

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_PROFILE",
    "OUTPUT_KEY_PREFIX",
    "DirectConvertRequest",
    "JobDescriptor",
    "JobResult",
    "JobResultStatus",
    "ObjectNotFoundError",
    "ObjectStorage",
    "PubSubEnvelope",
    "PubSubMessage",
    "QueueMessage",
    "QueueReceiver",
    "ScratchPaths",
    "StorageObjectNotification",
    "TranscodeOutcome",
    "TranscodeProfile",
    "Transcoder",
    "build_output_key",
    "configure_logging",
    "is_safe_object_key",
]
