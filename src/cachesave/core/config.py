"""Centralized configuration for cachesave."""

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import ConfigurationError
from .models import UploadOptions

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


def input_env_name(name: str) -> str:
    """Environment variable the runner uses for workflow input ``name``."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, env: Mapping[str, str] | None = None) -> str:
    env = os.environ if env is None else env
    return env.get(input_env_name(name), "").strip()


def get_input_as_list(name: str, env: Mapping[str, str] | None = None) -> list[str]:
    """Newline separated input, trimmed, blank lines dropped.

    A negation written as ``! pattern`` is normalized to ``!pattern``.
    """
    lines = (re.sub(r"^!\s+", "!", line.strip()) for line in get_input(name, env).split("\n"))
    return [line for line in lines if line]


def get_input_as_int(name: str, env: Mapping[str, str] | None = None) -> int | None:
    """Integer input; anything unparsable or non-positive means "use the default".

    Like the runner's own parsing, a leading integer is enough: "32MB" is 32.
    """
    match = re.match(r"[+-]?\d+", get_input(name, env))
    if match is None:
        return None
    value = int(match.group())
    return value if value > 0 else None


def get_input_as_bool(name: str, env: Mapping[str, str] | None = None) -> bool:
    """Lenient boolean: only a case-insensitive "true" is true."""
    return get_input(name, env).lower() == "true"


def get_boolean_input(
    name: str, env: Mapping[str, str] | None = None, default: bool = False
) -> bool:
    """Strict YAML 1.2 core schema boolean."""
    return parse_boolean(get_input(name, env), name, default)


def parse_boolean(raw: str, name: str, default: bool = False) -> bool:
    raw = raw.strip()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f'Input does not meet YAML 1.2 "Core Schema" specification: {name}\n'
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


@dataclass(frozen=True, slots=True)
class SaveConfig:
    """Workflow inputs of the save step.

    Environment variables (set by the runner from the step's ``with:`` block):
        INPUT_PATH:                   Newline separated path patterns. Required.
        INPUT_KEY:                    Primary key, unless restore recorded one.
        INPUT_UPDATE:                 Refresh an exact-match entry in place. Default false.
        INPUT_UPLOAD-CHUNK-SIZE:      Upload chunk size in bytes.
        INPUT_ENABLECROSSOSARCHIVE:   Allow restoring on a different OS.
    """

    paths: tuple[str, ...] = ()
    key: str = ""
    # Raw input text is only parsed once an exact cache hit makes it relevant
    update: bool | str = False
    upload_options: UploadOptions = field(default_factory=UploadOptions)

    def update_requested(self) -> bool:
        if isinstance(self.update, bool):
            return self.update
        return parse_boolean(self.update, "update")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "SaveConfig":
        """Build config from the runner's input variables."""
        return cls(
            paths=tuple(get_input_as_list("path", env)),
            key=get_input("key", env),
            update=get_input("update", env),
            upload_options=UploadOptions(
                upload_chunk_size=get_input_as_int("upload-chunk-size", env),
                enable_cross_os_archive=get_input_as_bool("enableCrossOsArchive", env),
            ),
        )


@dataclass(slots=True)
class CacheSaveSettings:
    """Adapter settings.

    Environment variables (all optional):
        CACHESAVE_BUCKET:        S3 bucket holding cache archives. Caching is
                                 unavailable when unset.
        CACHESAVE_PREFIX:        Key prefix inside the bucket. Default "caches/".
        CACHESAVE_REGION:        AWS region for the bucket.
        CACHESAVE_HTTP_TIMEOUT:  Timeout in seconds for cache API requests. Default 30.
                                 Checked when the cache API is first called.
        CACHESAVE_LOG_LEVEL:     Logging level. Default "INFO".
        GITHUB_API_URL:          REST API root. Default "https://api.github.com".
    """

    bucket: str | None = None
    prefix: str = "caches/"
    region: str | None = None
    http_timeout: float | str = 30.0
    log_level: str = "INFO"
    api_url: str = "https://api.github.com"

    # Connection params (typically passed by CLI, not env vars)
    endpoint_url: str | None = field(default=None, repr=False)

    @classmethod
    def from_env(
        cls,
        *,
        log_level: str = "INFO",
        endpoint_url: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> "CacheSaveSettings":
        """Build settings from environment variables + explicit overrides."""
        env = os.environ if env is None else env
        return cls(
            bucket=env.get("CACHESAVE_BUCKET") or None,
            prefix=env.get("CACHESAVE_PREFIX", "caches/"),
            region=env.get("CACHESAVE_REGION") or None,
            http_timeout=env.get("CACHESAVE_HTTP_TIMEOUT", "30"),
            log_level=env.get("CACHESAVE_LOG_LEVEL", log_level),
            api_url=env.get("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
            endpoint_url=endpoint_url or env.get("CACHESAVE_ENDPOINT_URL") or None,
        )
