"""Pytest fixtures for adapter tests (moto-backed AWS resources)."""

import os

import pytest
from moto import mock_aws


@pytest.fixture(scope="function")
def aws_credentials():
    """Set fake AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def moto_aws(aws_credentials):
    """Enable moto mock for SQS and S3."""
    with mock_aws():
        yield


@pytest.fixture
def sqs_queue(moto_aws):
    """Create an SQS queue and return its URL."""
    import boto3

    client = boto3.client("sqs", region_name="us-east-1")
    resp = client.create_queue(QueueName="test-transcode-queue")
    return resp["QueueUrl"]


@pytest.fixture
def s3_buckets(moto_aws):
    """Create raw and processed S3 buckets."""
    import boto3

    client = boto3.client("s3", region_name="us-east-1")
    client.create_bucket(Bucket="test-raw-videos")
    client.create_bucket(Bucket="test-processed-videos")
    return "test-raw-videos", "test-processed-videos"
