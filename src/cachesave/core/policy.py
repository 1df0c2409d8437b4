"""Decision functions for the save pipeline.

Each function is pure: it looks at the run context and configuration and
returns what should happen. Side effects stay in ``SaveService``.
"""

from .models import Action, Decision, Eligibility, SaveContext

GHES_UNSUPPORTED_MESSAGE = (
    "Cache action is only supported on GHES version >= 3.5. If you are on version >=3.5 "
    "Please check with GHES admin if Actions cache service is enabled or not."
)
BACKEND_UNAVAILABLE_MESSAGE = (
    "An internal error has occurred in cache backend. "
    "Please check https://www.githubstatus.com/ for any ongoing issue in actions."
)
UPDATE_DISABLED_MESSAGE = "`update` option is false. Not saving cache."
MISSING_TOKEN_MESSAGE = (
    "`update` option is true, but env var GITHUB_TOKEN is empty. Not saving cache. "
    "Please set the GITHUB_TOKEN variable to ${{ secrets.GITHUB_TOKEN }}"
)


def check_eligible(context: SaveContext) -> Eligibility:
    """Check that the cache backend is usable and the event has a ref."""
    if not context.feature_available:
        if context.is_ghes:
            return Eligibility(eligible=False, reason=GHES_UNSUPPORTED_MESSAGE)
        return Eligibility(eligible=False, reason=BACKEND_UNAVAILABLE_MESSAGE)

    if not context.ref:
        return Eligibility(
            eligible=False,
            reason=(
                f"Event Validation Error: The event type {context.event_name} is not "
                "supported because it's not tied to a branch or tag ref."
            ),
        )
    return Eligibility(eligible=True)


def resolve_primary_key(state_key: str | None, input_key: str | None) -> str | None:
    """Prefer the key the restore step used, fall back to the configured one."""
    return state_key or input_key or None


def is_exact_key_match(key: str, cache_key: str | None) -> bool:
    return bool(cache_key) and cache_key == key


def decide(
    primary_key: str,
    restored_key: str | None,
    *,
    update: bool,
    token: str | None,
) -> Decision:
    """Decide between a fresh save, skipping, or refreshing an exact hit."""
    if not is_exact_key_match(primary_key, restored_key):
        return Decision(action=Action.PROCEED_FRESH)
    if not update:
        return Decision(action=Action.SKIP, reason=UPDATE_DISABLED_MESSAGE)
    if not token:
        return Decision(action=Action.SKIP, reason=MISSING_TOKEN_MESSAGE)
    return Decision(action=Action.UPDATE)
