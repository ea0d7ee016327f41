"""GCS implementation of ObjectStorage."""

from google.api_core.exceptions import NotFound
from google.cloud import storage as gcs_storage
from vidpress_shared import ObjectNotFoundError


class GCSObjectStorage:
    """ObjectStorage implementation using Google Cloud Storage."""

    def __init__(
        self,
        *,
        project: str | None = None,
        client: gcs_storage.Client | None = None,
    ) -> None:
        self._client = client or gcs_storage.Client(project=project)

    def _blob(self, bucket: str, key: str):
        return self._client.bucket(bucket).blob(key)

    def download_file(self, bucket: str, key: str, path: str) -> None:
        """Download bucket/key to a local path. Raises ObjectNotFoundError if missing."""
        try:
            self._blob(bucket, key).download_to_filename(path)
        except NotFound as e:
            raise ObjectNotFoundError(bucket, key) from e

    def upload_file(self, bucket: str, key: str, path: str) -> None:
        """Upload a local file to bucket/key (resumable upload for large files)."""
        self._blob(bucket, key).upload_from_filename(path)

    def make_public(self, bucket: str, key: str) -> None:
        """Grant allUsers READER on the object."""
        self._blob(bucket, key).make_public()
