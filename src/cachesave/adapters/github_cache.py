"""GitHub Actions cache REST API adapter."""

import requests

from ..core.errors import ConfigurationError, RemoteError
from ..ports.cache import DeleteOutcome, RemoteEntryRef

HTTP_STATUS_NOT_FOUND = 404


class GitHubCacheEntryAdapter:
    """Manage cache entries through ``/repos/{owner}/{repo}/actions/caches``."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float | str = 30.0,
        session: requests.Session | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def delete_entry(self, ref: RemoteEntryRef) -> DeleteOutcome:
        url = f"{self.api_url}/repos/{ref.owner}/{ref.repo}/actions/caches"
        try:
            response = self.session.delete(
                url,
                params={"key": ref.key, "ref": ref.ref},
                timeout=_parse_timeout(self.timeout),
            )
        except requests.RequestException as e:
            raise RemoteError(f"Failed to delete cache entry {ref.key}: {e}") from e

        if response.status_code == HTTP_STATUS_NOT_FOUND:
            return DeleteOutcome.NOT_FOUND
        if not response.ok:
            raise RemoteError(
                f"Failed to delete cache entry {ref.key}: "
                f"HTTP {response.status_code} {_error_message(response)}",
                status=response.status_code,
            )
        return DeleteOutcome.DELETED


def _parse_timeout(value: float | str) -> float:
    try:
        timeout = float(value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid CACHESAVE_HTTP_TIMEOUT: {value!r}") from e
    if timeout <= 0:
        raise ConfigurationError(f"Invalid CACHESAVE_HTTP_TIMEOUT: {value!r}")
    return timeout


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text.strip()
