"""Storage and queue adapters for the vidpress transcoding service."""

from .env_config import object_storage_from_env, queue_receiver_from_env
from .gcs_storage import GCSObjectStorage
from .s3_storage import S3ObjectStorage
from .sqs_queues import SQSQueueReceiver

__all__ = [
    "GCSObjectStorage",
    "S3ObjectStorage",
    "SQSQueueReceiver",
    "object_storage_from_env",
    "queue_receiver_from_env",
]
