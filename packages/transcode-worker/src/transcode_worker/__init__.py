"""Video transcoding worker: fetch from object storage, transcode to 360p, publish, clean up."""

from .pipeline import run_direct_conversion, run_job, validate_descriptor

__version__ = "0.1.0"
__all__ = ["run_direct_conversion", "run_job", "validate_descriptor"]
