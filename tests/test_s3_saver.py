"""Tests for the S3 cache saver adapter."""

import tarfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from cachesave.adapters import S3CacheSaverAdapter
from cachesave.adapters.s3_saver import cache_version, resolve_paths, validate_key
from cachesave.core import CacheValidationError, RemoteError
from cachesave.core.config import get_input_as_list


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / "deps" / "pkg").mkdir(parents=True)
    (tmp_path / "deps" / "pkg" / "index.js").write_text("module.exports = 1\n")
    (tmp_path / "deps" / "pkg" / "debug.log").write_text("noise\n")
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "app.bin").write_bytes(b"\x00\x01")
    return tmp_path


def test_validate_key() -> None:
    validate_key("Linux-node-" + "a" * 500)
    with pytest.raises(CacheValidationError, match="cannot contain commas"):
        validate_key("a,b")
    with pytest.raises(CacheValidationError, match="larger than 512"):
        validate_key("k" * 513)


def test_cache_version_depends_on_platform_and_cross_os() -> None:
    linux = cache_version(["dist"], platform="linux")
    windows = cache_version(["dist"], platform="win32")
    windows_cross = cache_version(["dist"], enable_cross_os_archive=True, platform="win32")

    assert linux != windows
    assert windows_cross == linux
    assert cache_version(["dist", "deps"], platform="linux") != linux


def test_resolve_paths_expands_dirs_and_excludes(workspace: Path) -> None:
    files = resolve_paths(["deps", "dist/*.bin", "!**/*.log"], workspace)

    assert files == [
        workspace / "deps" / "pkg" / "index.js",
        workspace / "dist" / "app.bin",
    ]


def test_resolve_paths_honors_spaced_negation(tmp_path: Path) -> None:
    (tmp_path / "dist" / "tmp").mkdir(parents=True)
    (tmp_path / "dist" / "keep.txt").write_text("keep\n")
    (tmp_path / "dist" / "tmp" / "drop.txt").write_text("drop\n")
    patterns = get_input_as_list("path", {"INPUT_PATH": "dist\n! dist/tmp"})

    assert resolve_paths(patterns, tmp_path) == [tmp_path / "dist" / "keep.txt"]


def test_resolve_paths_without_matches(workspace: Path) -> None:
    assert resolve_paths(["missing/**"], workspace) == []


def test_save_uploads_archive(workspace: Path) -> None:
    client = MagicMock()
    archived: list[str] = []

    def capture(filename, bucket, key, ExtraArgs, Config):
        with tarfile.open(filename, "r:gz") as tar:
            archived.extend(tar.getnames())

    client.upload_file.side_effect = capture
    adapter = S3CacheSaverAdapter(
        bucket="ci-caches", workspace=workspace, client=client, platform="linux"
    )

    cache_id = adapter.save_cache(["deps", "dist"], "build-abc", upload_chunk_size=8 * 1024 * 1024)

    version = cache_version(["deps", "dist"], platform="linux")
    assert cache_id > 0
    assert sorted(archived) == ["deps/pkg/debug.log", "deps/pkg/index.js", "dist/app.bin"]
    _, bucket, key = client.upload_file.call_args.args
    kwargs = client.upload_file.call_args.kwargs
    assert bucket == "ci-caches"
    assert key == f"caches/{version}/build-abc.tar.gz"
    assert kwargs["ExtraArgs"]["Metadata"]["cache-version"] == version
    assert kwargs["Config"].multipart_chunksize == 8 * 1024 * 1024


def test_cache_id_is_stable(workspace: Path) -> None:
    adapter = S3CacheSaverAdapter(bucket="ci-caches", workspace=workspace, client=MagicMock())
    assert adapter.save_cache(["dist"], "k") == adapter.save_cache(["dist"], "k")


def test_save_without_matches_raises(workspace: Path) -> None:
    client = MagicMock()
    adapter = S3CacheSaverAdapter(bucket="ci-caches", workspace=workspace, client=client)

    with pytest.raises(CacheValidationError, match="Path Validation Error"):
        adapter.save_cache(["nothing-here"], "build-abc")
    client.upload_file.assert_not_called()


def test_upload_failure_raises_remote_error(workspace: Path) -> None:
    client = MagicMock()
    client.upload_file.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject"
    )
    adapter = S3CacheSaverAdapter(bucket="ci-caches", workspace=workspace, client=client)

    with pytest.raises(RemoteError, match="Access Denied"):
        adapter.save_cache(["dist"], "build-abc")


def test_availability_follows_bucket(workspace: Path) -> None:
    assert S3CacheSaverAdapter(bucket="b", workspace=workspace).is_available()
    assert not S3CacheSaverAdapter(bucket=None, workspace=workspace).is_available()
