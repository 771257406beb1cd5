import logging
import mimetypes
import os
from typing import List, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from landly.config import settings
from landly.exceptions import PublishError

logger = logging.getLogger(__name__)

SITES_PREFIX = "sites/"

# mimetypes has no entry for these on some minimal images
_CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
}


def guess_content_type(path: str, fallback: str = "application/octet-stream") -> str:
    ext = os.path.splitext(path)[1].lower()
    if ext in _CONTENT_TYPES:
        return _CONTENT_TYPES[ext]
    return mimetypes.guess_type(path)[0] or fallback


def iter_build_files(local_dir: str) -> List[Tuple[str, str]]:
    """(absolute path, forward-slash relative path) for every file under local_dir, sorted."""
    if not os.path.isdir(local_dir):
        raise PublishError(f"Not a directory: {local_dir}", details={"local_dir": local_dir})
    files: List[Tuple[str, str]] = []
    for root, _dirs, names in os.walk(local_dir):
        for name in names:
            path = os.path.join(root, name)
            files.append((path, os.path.relpath(path, local_dir).replace("\\", "/")))
    return sorted(files, key=lambda item: item[1])


def join_key(prefix: str, relative: str) -> str:
    return f"{prefix.strip('/')}/{relative.lstrip('/')}" if prefix.strip("/") else relative.lstrip("/")


class Publisher:
    def upload(self, local_dir: str, remote_prefix: str) -> int:
        raise NotImplementedError

    def get_object(self, remote_path: str) -> Tuple[bytes, str]:
        raise NotImplementedError

    def get_public_url(self, remote_path: str) -> str:
        raise NotImplementedError


class LocalDiskPublisher(Publisher):
    def __init__(self, base_dir: Optional[str] = None, public_base_url: Optional[str] = None) -> None:
        self.base_dir = base_dir or settings.PUBLISH_DIR
        self.public_base_url = public_base_url or settings.PUBLIC_BASE_URL

    def _full_path(self, path: str) -> str:
        cleaned = path.lstrip("/").replace("\\", "/")
        root = os.path.realpath(self.base_dir)
        full_path = os.path.realpath(os.path.join(root, cleaned))
        if full_path != root and not full_path.startswith(root + os.sep):
            raise PublishError(f"Path escapes publish directory: {path}")
        return full_path

    def upload(self, local_dir: str, remote_prefix: str) -> int:
        count = 0
        for path, rel in iter_build_files(local_dir):
            full_path = self._full_path(join_key(remote_prefix, rel))
            try:
                os.makedirs(os.path.dirname(full_path), exist_ok=True)
                with open(path, "rb") as source, open(full_path, "wb") as target:
                    target.write(source.read())
            except OSError as exc:
                raise PublishError(f"Local upload failed: {exc}", details={"key": rel}) from exc
            count += 1
        logger.info("Build uploaded to local storage", extra={"files": count, "stage": "upload"})
        return count

    def get_object(self, remote_path: str) -> Tuple[bytes, str]:
        full_path = self._full_path(remote_path)
        try:
            with open(full_path, "rb") as handle:
                return handle.read(), guess_content_type(full_path)
        except OSError as exc:
            raise PublishError(f"Object not found: {remote_path}", details={"key": remote_path}) from exc

    def get_public_url(self, remote_path: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/{remote_path.lstrip('/')}"


class S3Publisher(Publisher):
    def __init__(
        self,
        bucket: str,
        access_key: str,
        secret_key: str,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        client=None,
    ) -> None:
        self.bucket = bucket
        self.public_base_url = public_base_url
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            endpoint_url=endpoint_url or None,
        )

    def upload(self, local_dir: str, remote_prefix: str) -> int:
        count = 0
        for path, rel in iter_build_files(local_dir):
            key = join_key(remote_prefix, rel)
            try:
                with open(path, "rb") as handle:
                    self.client.put_object(
                        Bucket=self.bucket,
                        Key=key,
                        Body=handle.read(),
                        ContentType=guess_content_type(path),
                    )
            except (BotoCoreError, ClientError, OSError) as exc:
                raise PublishError(f"S3 upload failed: {exc}", details={"key": key}) from exc
            count += 1
        logger.info("Build uploaded to S3", extra={"files": count, "stage": "upload"})
        return count

    def get_object(self, remote_path: str) -> Tuple[bytes, str]:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=remote_path.lstrip("/"))
        except (BotoCoreError, ClientError) as exc:
            raise PublishError(f"S3 download failed: {exc}", details={"key": remote_path}) from exc
        content_type = response.get("ContentType") or guess_content_type(remote_path)
        return response["Body"].read(), content_type

    def get_public_url(self, remote_path: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{remote_path.lstrip('/')}"
        return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/{remote_path.lstrip('/')}"


def get_publisher() -> Publisher:
    backend = (settings.STORAGE_BACKEND or "local").lower()
    if backend == "s3" and settings.s3_configured:
        return S3Publisher(
            bucket=settings.S3_BUCKET,
            access_key=settings.S3_ACCESS_KEY,
            secret_key=settings.S3_SECRET_KEY,
            region=settings.S3_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
            public_base_url=settings.S3_PUBLIC_BASE_URL,
        )
    if backend == "s3":
        logger.warning("STORAGE_BACKEND=s3 but S3 is not configured; using local disk")
    return LocalDiskPublisher()
