"""Pydantic models for transcode jobs, results, profiles, and trigger payloads."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .keys import build_output_key


class JobDescriptor(BaseModel):
    """A single transcode job. Identity is the source object key."""

    source_key: str = Field(..., min_length=1, description="Object key in the raw bucket")

    @property
    def output_key(self) -> str:
        """Object key of the transcoded file in the processed bucket."""
        return build_output_key(self.source_key)


class ScratchPaths(BaseModel):
    """Local staging paths owned by one job for its lifetime."""

    raw_path: Path
    processed_path: Path


class TranscodeProfile(BaseModel):
    """Fixed output profile: scale to target height, width follows the aspect ratio."""

    model_config = ConfigDict(frozen=True)

    target_height: int = Field(360, ge=2)


DEFAULT_PROFILE = TranscodeProfile()


class JobResultStatus(str, Enum):
    """Outcome of a job as seen by the trigger."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    FAILED = "failed"


class JobResult(BaseModel):
    """
    Tagged job outcome.

    accepted carries published_key; rejected (bad request) and failed (internal)
    carry a reason for the caller.
    """

    status: JobResultStatus
    published_key: str | None = None
    reason: str | None = None

    @classmethod
    def accepted(cls, published_key: str) -> "JobResult":
        return cls(status=JobResultStatus.ACCEPTED, published_key=published_key)

    @classmethod
    def rejected(cls, reason: str) -> "JobResult":
        return cls(status=JobResultStatus.REJECTED, reason=reason)

    @classmethod
    def failed(cls, reason: str) -> "JobResult":
        return cls(status=JobResultStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == JobResultStatus.ACCEPTED


class TranscodeOutcome(BaseModel):
    """Single settlement of one transcode invocation."""

    ok: bool
    message: str | None = None

    @classmethod
    def success(cls) -> "TranscodeOutcome":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str) -> "TranscodeOutcome":
        return cls(ok=False, message=message)


# --- Trigger payloads ---

class DirectConvertRequest(BaseModel):
    """Legacy direct form: convert between two local paths, no storage round-trip."""

    model_config = ConfigDict(populate_by_name=True)

    input_file_path: str = Field(..., min_length=1, alias="inputFilePath")
    output_file_path: str = Field(..., min_length=1, alias="outputFilePath")


class PubSubMessage(BaseModel):
    """Inner message of a push notification (data is base64-encoded JSON)."""

    data: str = Field(..., min_length=1)
    message_id: str | None = Field(None, alias="messageId")
    attributes: dict[str, str] | None = None


class PubSubEnvelope(BaseModel):
    """Push notification envelope: {"message": {"data": ...}}."""

    message: PubSubMessage
    subscription: str | None = None


class StorageObjectNotification(BaseModel):
    """Decoded notification body. Only name (the object key) is used."""

    name: str = Field(..., min_length=1)
    bucket: str | None = None
