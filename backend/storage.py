"""
Storage for uploaded GIS files: local disk, S3-compatible buckets (Tencent
COS, AWS S3) and an in-memory double for tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Protocol

import boto3
from botocore.config import Config


class UploadStorage(Protocol):
    """Defines the operations the upload endpoint needs from storage."""

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        """Store the bytes and return the path they can be found at."""
        ...

    def get_bytes(self, path: str) -> bytes:
        ...


@dataclass
class InMemoryUploadStorage:
    """Test double for storage interactions."""

    prefix: str = "uploads"
    stored_objects: dict = field(default_factory=dict)

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        path = f"{self.prefix}/{filename}"
        self.stored_objects[path] = data
        return path

    def get_bytes(self, path: str) -> bytes:
        stored = self.stored_objects.get(path)
        if stored is None:
            raise FileNotFoundError(path)
        return stored


@dataclass
class LocalUploadStorage:
    """Writes uploads into a directory, created on first use."""

    directory: str = "uploads"

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        os.makedirs(self.directory, exist_ok=True)
        path = os.path.join(self.directory, filename)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def get_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()


@dataclass
class CosUploadStorage:
    """
    S3-compatible storage client for Tencent COS.
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    prefix: str = "uploads"

    def __post_init__(self):
        # Use virtual-hosted style addressing to satisfy COS requirements.
        config = Config(
            s3={"addressing_style": "virtual"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint,
            region_name=self.region,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        key = f"{self.prefix}/{filename}"
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type or "application/octet-stream",
        )
        return key

    def get_bytes(self, path: str) -> bytes:
        response = self._client.get_object(Bucket=self.bucket, Key=path)
        return response["Body"].read()
