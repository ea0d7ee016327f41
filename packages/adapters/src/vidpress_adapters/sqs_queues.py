"""SQS implementation of QueueReceiver for transcode notifications."""

import boto3
from vidpress_shared.interfaces import QueueMessage

# SQS caps a single receive at 10 messages
SQS_MAX_BATCH = 10


class SQSQueueReceiver:
    """
    QueueReceiver implementation using SQS.

    visibility_timeout (seconds) overrides the queue default for received
    messages; a transcode must finish inside it or the message is redelivered.
    """

    def __init__(
        self,
        queue_url: str,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
        wait_time_seconds: int = 0,
        visibility_timeout: int | None = None,
    ) -> None:
        self._queue_url = queue_url
        self._wait_time_seconds = wait_time_seconds
        self._visibility_timeout = visibility_timeout
        self._client = boto3.client("sqs", region_name=region_name, endpoint_url=endpoint_url)

    def receive(self, max_messages: int = 1) -> list[QueueMessage]:
        params = {
            "QueueUrl": self._queue_url,
            "MaxNumberOfMessages": max(1, min(max_messages, SQS_MAX_BATCH)),
            "WaitTimeSeconds": self._wait_time_seconds,
        }
        if self._visibility_timeout is not None:
            params["VisibilityTimeout"] = self._visibility_timeout
        resp = self._client.receive_message(**params)
        return [
            QueueMessage(receipt_handle=msg["ReceiptHandle"], body=msg["Body"])
            for msg in resp.get("Messages") or []
        ]

    def delete(self, receipt_handle: str) -> None:
        self._client.delete_message(QueueUrl=self._queue_url, ReceiptHandle=receipt_handle)
