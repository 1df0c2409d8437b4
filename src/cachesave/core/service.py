"""Core SaveService orchestration."""

from dataclasses import replace

from ..ports import CacheEntryPort, CacheSaverPort, ClockPort, LoggerPort
from .config import SaveConfig
from .errors import ConfigurationError
from .models import (
    NO_OP_CACHE_ID,
    Action,
    DeleteOutcome,
    RemoteEntryRef,
    SaveContext,
    SaveSummary,
    UploadOptions,
    parse_repository,
)
from .policy import check_eligible, decide, is_exact_key_match, resolve_primary_key


class SaveService:
    """Decide whether a cache should be saved, then save it."""

    def __init__(
        self,
        saver: CacheSaverPort,
        entries: CacheEntryPort,
        clock: ClockPort,
        logger: LoggerPort,
    ):
        self.saver = saver
        self.entries = entries
        self.clock = clock
        self.logger = logger

    def save(self, config: SaveConfig, context: SaveContext) -> SaveSummary:
        """Run the save pipeline.

        Never raises: any failure is logged as a warning and reported as a
        summary whose ``cache_id`` is ``NO_OP_CACHE_ID``.
        """
        start_time = self.clock.now()
        try:
            summary = self._run(config, context)
        except Exception as e:
            self.logger.warning(str(e), error_type=type(e).__name__)
            summary = SaveSummary(cache_id=NO_OP_CACHE_ID, error=str(e) or type(e).__name__)

        duration = (self.clock.now() - start_time).total_seconds()
        self.logger.debug(
            "Save finished",
            key=summary.key,
            action=summary.action.value if summary.action else None,
            cache_id=summary.cache_id,
            duration=duration,
            error=summary.error,
        )
        return replace(summary, duration=duration)

    def _run(self, config: SaveConfig, context: SaveContext) -> SaveSummary:
        eligibility = check_eligible(context)
        if not eligibility.eligible:
            self.logger.warning(eligibility.reason or "Cache save is not available")
            return SaveSummary(cache_id=NO_OP_CACHE_ID)

        # Reuse the key restore ran with, even if the input changed since
        primary_key = resolve_primary_key(context.state_primary_key, config.key)
        if not primary_key:
            self.logger.warning("Key is not specified.")
            return SaveSummary(cache_id=NO_OP_CACHE_ID)

        update = False
        if is_exact_key_match(primary_key, context.restored_key):
            self.logger.info(f"Cache hit occurred on the primary key {primary_key}")
            update = config.update_requested()

        decision = decide(
            primary_key,
            context.restored_key,
            update=update,
            token=context.token,
        )
        if decision.action is Action.SKIP:
            self.logger.info(decision.reason or "Not saving cache.")
            return SaveSummary(cache_id=NO_OP_CACHE_ID, key=primary_key, action=decision.action)

        evicted = None
        if decision.action is Action.UPDATE:
            owner, repo = parse_repository(context.repository or "")
            entry = RemoteEntryRef(owner=owner, repo=repo, key=primary_key, ref=context.ref or "")
            evicted = self._evict(entry)

        cache_id = self._upload(config.paths, primary_key, config.upload_options)
        return SaveSummary(
            cache_id=cache_id,
            key=primary_key,
            action=decision.action,
            evicted=evicted,
        )

    def _evict(self, entry: RemoteEntryRef) -> DeleteOutcome:
        """Delete the existing entry so the key can be uploaded again."""
        self.logger.debug("Deleting old cache", owner=entry.owner, repo=entry.repo, ref=entry.ref)
        outcome = self.entries.delete_entry(entry)
        if outcome is DeleteOutcome.NOT_FOUND:
            self.logger.info("Old cache to delete was not found")
        else:
            self.logger.info("Deleted old cache")
        return outcome

    def _upload(self, paths: tuple[str, ...], key: str, options: UploadOptions) -> int:
        if not paths:
            raise ConfigurationError("Input required and not supplied: path")

        cache_id = self.saver.save_cache(
            list(paths),
            key,
            upload_chunk_size=options.upload_chunk_size,
            enable_cross_os_archive=options.enable_cross_os_archive,
        )
        if cache_id != NO_OP_CACHE_ID:
            self.logger.info(f"Cache saved with key: {key}")
        return cache_id
