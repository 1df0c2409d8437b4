"""CLI main entry point."""

import os

import click

from ...adapters import (
    EnvStateProvider,
    GitHubCacheEntryAdapter,
    NullStateProvider,
    S3CacheSaverAdapter,
    StdLoggerAdapter,
    UtcClockAdapter,
    load_context,
    set_output,
)
from ...core import NO_OP_CACHE_ID, CacheSaveSettings, SaveConfig, SaveService, SaveSummary
from ...ports import LoggerPort, StatePort
from ..safety import install_fault_barrier


def create_service(settings: CacheSaveSettings, logger: LoggerPort) -> SaveService:
    """Create service with wired adapters."""
    saver = S3CacheSaverAdapter(
        bucket=settings.bucket,
        prefix=settings.prefix,
        region=settings.region,
        endpoint_url=settings.endpoint_url,
    )
    entries = GitHubCacheEntryAdapter(
        token=os.environ.get("GITHUB_TOKEN", ""),
        api_url=settings.api_url,
        timeout=settings.http_timeout,
    )
    return SaveService(saver=saver, entries=entries, clock=UtcClockAdapter(), logger=logger)


def run_save(state: StatePort, logger: LoggerPort, log_level: str = "INFO") -> SaveSummary:
    """Load inputs, run the save pipeline and publish the ``cache-id`` output."""
    try:
        settings = CacheSaveSettings.from_env(log_level=log_level)
        service = create_service(settings, logger)
        config = SaveConfig.from_env()
        context = load_context(state, feature_available=service.saver.is_available())
    except Exception as e:
        logger.warning(str(e))
        return SaveSummary(cache_id=NO_OP_CACHE_ID, error=str(e) or type(e).__name__)

    summary = service.save(config, context)
    try:
        set_output("cache-id", summary.cache_id)
    except OSError as e:
        logger.warning(f"Failed to write step output: {e}")
    return summary


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """cachesave - Save build caches after a workflow run."""
    runner_debug = os.environ.get("RUNNER_DEBUG") == "1"
    log_level = "DEBUG" if debug or runner_debug else os.environ.get("CACHESAVE_LOG_LEVEL", "INFO")
    logger = StdLoggerAdapter(level=log_level)
    install_fault_barrier(logger)
    ctx.obj = {"logger": logger, "log_level": log_level}


@cli.command()
@click.pass_obj
def save(obj: dict) -> None:
    """Save the cache in the post step of a restore."""
    run_save(EnvStateProvider(), obj["logger"], obj["log_level"])


@cli.command("save-only")
@click.pass_obj
def save_only(obj: dict) -> None:
    """Save the cache without a preceding restore."""
    logger = obj["logger"]
    summary = run_save(NullStateProvider(), logger, obj["log_level"])
    if summary.failed:
        logger.warning("Cache save failed.")


def main() -> None:
    """Main entry point."""
    cli()
