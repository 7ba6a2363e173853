"""GitHub releases client.

Fetches /repos/{owner}/{repo}/releases and follows the Link header
pagination until the last page.
"""

import logging

import httpx

from ..errors import SourceUnavailable
from .base import ReleaseRecord

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GitHubReleaseSource:
    """Release source backed by the GitHub REST API.

    All repositories belong to a single owning organization.
    """

    def __init__(
        self,
        owner: str,
        token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        per_page: int = 100,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            owner: Organization owning every repository
            token: Optional token; anonymous when None
            api_url: GitHub REST API base URL
            per_page: Page size requested from the API
            timeout: HTTP timeout for a single page request
            transport: Optional httpx transport (used by tests)
        """
        self.owner = owner
        self.per_page = per_page
        self.authenticated = token is not None

        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "releasesd",
        }
        if token:
            headers["Authorization"] = f"token {token}"

        self._client = httpx.AsyncClient(
            base_url=api_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def fetch_all(self, repository_key: str) -> list[ReleaseRecord]:
        """Fetch every release of a repository, concatenating all pages.

        Args:
            repository_key: Repository name under the owner

        Returns:
            Releases in the order the API returned them

        Raises:
            SourceUnavailable: On any transport error, non-2xx status or bad payload
        """
        releases: list[ReleaseRecord] = []
        url: str | None = f"/repos/{self.owner}/{repository_key}/releases"
        params: dict[str, int] | None = {"per_page": self.per_page}

        while url is not None:
            try:
                response = await self._client.get(url, params=params)
            except httpx.HTTPError as e:
                raise SourceUnavailable(repository_key, f"{type(e).__name__}: {e}") from e

            if response.is_error:
                raise SourceUnavailable(
                    repository_key,
                    self._describe_error(response),
                    status_code=response.status_code,
                )

            try:
                page = response.json()
            except ValueError as e:
                raise SourceUnavailable(repository_key, f"invalid JSON payload: {e}") from e

            if not isinstance(page, list):
                raise SourceUnavailable(repository_key, f"unexpected payload type: {type(page).__name__}")

            releases.extend(page)

            # next link already carries the query string
            next_link = response.links.get("next")
            url = next_link["url"] if next_link else None
            params = None

        logger.debug(f"Fetched {len(releases)} releases for {self.owner}/{repository_key}")
        return releases

    def _describe_error(self, response: httpx.Response) -> str:
        if response.status_code in (403, 429) and response.headers.get("x-ratelimit-remaining") == "0":
            reset = response.headers.get("x-ratelimit-reset", "unknown")
            return f"rate limit exceeded (resets at {reset})"
        return f"HTTP {response.status_code}"

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
