"""S3 cache saver adapter."""

import fnmatch
import glob
import hashlib
import os
import sys
import tarfile
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import boto3
from boto3.exceptions import S3UploadFailedError
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..core.errors import CacheValidationError, RemoteError

COMPRESSION_METHOD = "gzip"
VERSION_SALT = "1.0"
MAX_KEY_LENGTH = 512


def validate_key(key: str) -> None:
    if len(key) > MAX_KEY_LENGTH:
        raise CacheValidationError(
            f"Key Validation Error: {key} cannot be larger than {MAX_KEY_LENGTH} characters."
        )
    if "," in key:
        raise CacheValidationError(f"Key Validation Error: {key} cannot contain commas.")


def cache_version(
    paths: Sequence[str],
    enable_cross_os_archive: bool = False,
    platform: str = sys.platform,
) -> str:
    """Digest identifying which restores may use an archive of ``paths``.

    Archives made on Windows are only restorable on Windows unless cross-OS
    archives were requested.
    """
    components = [*paths, COMPRESSION_METHOD]
    if platform == "win32" and not enable_cross_os_archive:
        components.append("windows-only")
    components.append(VERSION_SALT)
    return hashlib.sha256("|".join(components).encode("utf-8")).hexdigest()


def resolve_paths(patterns: Sequence[str], workspace: Path) -> list[Path]:
    """Expand glob patterns into the sorted list of files to archive.

    Patterns starting with ``!`` exclude matches of earlier patterns.
    """
    includes = [p for p in patterns if not p.startswith("!")]
    excludes = [p[1:] for p in patterns if p.startswith("!")]

    files: set[Path] = set()
    for pattern in includes:
        expanded = os.path.expanduser(pattern)
        for match in glob.glob(expanded, root_dir=workspace, recursive=True):
            path = Path(match) if os.path.isabs(match) else workspace / match
            if path.is_dir():
                files.update(p for p in path.rglob("*") if p.is_file())
            elif path.is_file():
                files.add(path)

    def excluded(path: Path) -> bool:
        rel = _archive_name(path, workspace)
        return any(
            fnmatch.fnmatch(rel, pattern) or rel.startswith(pattern.rstrip("/") + "/")
            for pattern in excludes
        )

    return sorted(p for p in files if not excluded(p))


def _archive_name(path: Path, workspace: Path) -> str:
    try:
        return path.relative_to(workspace).as_posix()
    except ValueError:
        return path.as_posix().lstrip("/")


class S3CacheSaverAdapter:
    """Save caches as gzip tarballs in an S3 bucket.

    Chunking, retries and multipart uploads are left to boto3's managed
    transfer. There are no server-assigned entry ids in S3, so the cache id is
    the first 48 bits of the version and key digest.
    """

    def __init__(
        self,
        bucket: str | None,
        prefix: str = "caches/",
        workspace: str | Path | None = None,
        region: str | None = None,
        endpoint_url: str | None = None,
        client: Any | None = None,
        platform: str = sys.platform,
    ):
        self.bucket = bucket
        self.prefix = prefix
        self.workspace = Path(workspace or os.environ.get("GITHUB_WORKSPACE") or os.getcwd())
        self.region = region
        self.endpoint_url = endpoint_url
        self.platform = platform
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client(
                "s3", region_name=self.region, endpoint_url=self.endpoint_url
            )
        return self._client

    def is_available(self) -> bool:
        return bool(self.bucket)

    def object_key(self, key: str, version: str) -> str:
        return f"{self.prefix}{version}/{key}.tar.gz"

    def save_cache(
        self,
        paths: Sequence[str],
        key: str,
        upload_chunk_size: int | None = None,
        enable_cross_os_archive: bool = False,
    ) -> int:
        if not self.bucket:
            raise RemoteError("Cache bucket is not configured")
        validate_key(key)

        files = resolve_paths(paths, self.workspace)
        if not files:
            raise CacheValidationError(
                "Path Validation Error: Path(s) specified in the action for caching "
                "do(es) not exist, hence no cache is being saved."
            )

        version = cache_version(paths, enable_cross_os_archive, self.platform)
        object_key = self.object_key(key, version)
        config = (
            TransferConfig(multipart_chunksize=upload_chunk_size)
            if upload_chunk_size
            else TransferConfig()
        )

        with tempfile.TemporaryDirectory() as tmpdir:
            archive_path = Path(tmpdir) / "cache.tgz"
            with tarfile.open(archive_path, "w:gz") as tar:
                for path in files:
                    tar.add(path, arcname=_archive_name(path, self.workspace))

            try:
                self.client.upload_file(
                    str(archive_path),
                    self.bucket,
                    object_key,
                    ExtraArgs={
                        "Metadata": {
                            "cache-key": key,
                            "cache-version": version,
                            "compression": COMPRESSION_METHOD,
                        }
                    },
                    Config=config,
                )
            except (BotoCoreError, ClientError, S3UploadFailedError) as e:
                raise RemoteError(f"Failed to upload cache {key}: {e}") from e

        digest = hashlib.sha256(f"{version}|{key}".encode()).hexdigest()
        return int(digest[:12], 16)
