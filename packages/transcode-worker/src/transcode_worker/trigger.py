"""
Decode inbound job notifications into a JobDescriptor or a DirectConvertRequest.

Accepted shapes:
- push envelope:  {"message": {"data": base64(JSON with "name")}}
- direct paths:   {"inputFilePath": ..., "outputFilePath": ...}
- direct key:     {"name": "clip.mp4"}
- S3 event:       {"Records": [{"s3": {"object": {"key": ...}}}]}

Any decode/parse failure or missing field raises BadRequestError.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any
from urllib.parse import unquote_plus

from pydantic import ValidationError
from vidpress_shared import (
    DirectConvertRequest,
    JobDescriptor,
    PubSubEnvelope,
    StorageObjectNotification,
)

from .errors import BadRequestError

TriggerRequest = JobDescriptor | DirectConvertRequest


def decode_push_data(data: str) -> JobDescriptor:
    """Decode the base64 JSON payload of a push message and return its object name."""
    try:
        raw = base64.b64decode(data, validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadRequestError(f"Invalid message payload: {e}") from e
    if not isinstance(payload, dict):
        raise BadRequestError("Invalid message payload: expected a JSON object")
    try:
        notification = StorageObjectNotification.model_validate(payload)
    except ValidationError as e:
        raise BadRequestError("Missing filename.") from e
    return JobDescriptor(source_key=notification.name)


def _key_from_s3_event(data: dict[str, Any]) -> JobDescriptor:
    records = data.get("Records")
    if not records or not isinstance(records, list) or not isinstance(records[0], dict):
        raise BadRequestError("Invalid S3 event: no records")
    s3_data = records[0].get("s3")
    obj = s3_data.get("object") if isinstance(s3_data, dict) else None
    key = obj.get("key") if isinstance(obj, dict) else None
    if not isinstance(key, str) or not key:
        raise BadRequestError("Invalid S3 event: missing object key")
    # S3 notifications URL-encode keys (spaces arrive as '+')
    return JobDescriptor(source_key=unquote_plus(key))


def decode_job_request(body: Any) -> TriggerRequest:
    """Decode a parsed JSON request body into a trigger request."""
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    if "message" in body:
        try:
            envelope = PubSubEnvelope.model_validate(body)
        except ValidationError as e:
            raise BadRequestError("Missing message data.") from e
        return decode_push_data(envelope.message.data)
    if "inputFilePath" in body or "outputFilePath" in body:
        try:
            return DirectConvertRequest.model_validate(body)
        except ValidationError as e:
            raise BadRequestError("Missing file path.") from e
    if "Records" in body:
        return _key_from_s3_event(body)
    name = body.get("name")
    if isinstance(name, str) and name:
        return JobDescriptor(source_key=name)
    raise BadRequestError("Missing filename.")


def decode_queue_body(body: str | bytes) -> TriggerRequest:
    """Decode a raw queue message body (JSON text) into a trigger request."""
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BadRequestError("Message body is not UTF-8") from e
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise BadRequestError(f"Message body is not JSON: {e}") from e
    return decode_job_request(data)
