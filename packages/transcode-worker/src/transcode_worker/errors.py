"""
Error taxonomy for the transcode pipeline.

Callers of the pipeline only ever see success, bad request, or internal error;
the subclasses below exist so logs can name the failing stage.
"""


class TranscodeWorkerError(Exception):
    """Base class for pipeline errors."""

    stage = "pipeline"


class BadRequestError(TranscodeWorkerError):
    """Missing or unparseable job identifier. Raised before any side effect."""

    stage = "validate"


class UpstreamFailure(TranscodeWorkerError):
    """Object storage fetch or publish failed."""

    stage = "storage"


class SourceNotFoundError(UpstreamFailure):
    """Source object does not exist in the raw bucket."""

    stage = "fetch"


class FetchError(UpstreamFailure):
    """Source object could not be downloaded."""

    stage = "fetch"


class PublishUploadError(UpstreamFailure):
    """Processed file could not be uploaded."""

    stage = "publish"


class PublishVisibilityError(UpstreamFailure):
    """Processed object was uploaded but could not be made public."""

    stage = "publish"


class TranscodeFailure(TranscodeWorkerError):
    """The transcode engine reported failure."""

    stage = "transcode"


class LocalIOFailure(TranscodeWorkerError):
    """Scratch directory could not be created or a scratch file could not be removed."""

    stage = "scratch"
