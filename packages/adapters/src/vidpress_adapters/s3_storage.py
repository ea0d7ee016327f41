"""S3 implementation of ObjectStorage."""

import os

import boto3
from botocore.exceptions import ClientError
from vidpress_shared import ObjectNotFoundError

# Minimum S3 multipart part size (except last) is 5 MB
MULTIPART_CHUNK_SIZE = 8 * 1024 * 1024  # 8 MB
MULTIPART_THRESHOLD = 100 * 1024 * 1024  # 100 MB: use multipart above this

_NOT_FOUND_CODES = ("404", "NoSuchKey", "NoSuchBucket")


def _is_not_found(e: ClientError) -> bool:
    return e.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class S3ObjectStorage:
    """ObjectStorage implementation using S3."""

    def __init__(
        self,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._client = boto3.client(
            "s3",
            region_name=region_name,
            endpoint_url=endpoint_url,
        )

    def download_file(self, bucket: str, key: str, path: str) -> None:
        """Stream bucket/key to a local path. Raises ObjectNotFoundError if missing."""
        try:
            self._client.download_file(bucket, key, path)
        except ClientError as e:
            if _is_not_found(e):
                raise ObjectNotFoundError(bucket, key) from e
            raise

    def upload_file(self, bucket: str, key: str, path: str) -> None:
        """Upload a file from local path; uses multipart for files over 100 MB."""
        file_size = os.path.getsize(path)
        if file_size >= MULTIPART_THRESHOLD:
            self._upload_multipart(bucket, key, path)
        else:
            with open(path, "rb") as f:
                self._client.put_object(Bucket=bucket, Key=key, Body=f.read())

    def _upload_multipart(self, bucket: str, key: str, path: str) -> None:
        """Upload using S3 multipart API for large files."""
        resp = self._client.create_multipart_upload(Bucket=bucket, Key=key)
        upload_id = resp["UploadId"]
        parts: list[dict] = []
        try:
            with open(path, "rb") as f:
                part_number = 1
                while True:
                    chunk = f.read(MULTIPART_CHUNK_SIZE)
                    if not chunk:
                        break
                    part_resp = self._client.upload_part(
                        Bucket=bucket,
                        Key=key,
                        UploadId=upload_id,
                        PartNumber=part_number,
                        Body=chunk,
                    )
                    parts.append({"ETag": part_resp["ETag"], "PartNumber": part_number})
                    part_number += 1
            self._client.complete_multipart_upload(
                Bucket=bucket,
                Key=key,
                UploadId=upload_id,
                MultipartUpload={"Parts": parts},
            )
        except Exception:
            self._client.abort_multipart_upload(
                Bucket=bucket, Key=key, UploadId=upload_id
            )
            raise

    def make_public(self, bucket: str, key: str) -> None:
        """Set the object ACL to public-read."""
        self._client.put_object_acl(Bucket=bucket, Key=key, ACL="public-read")
