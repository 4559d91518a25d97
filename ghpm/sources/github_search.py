"""GitHub repository search over the REST API."""

import time

import httpx
from pydantic import ValidationError

from ghpm.core.config.settings import GitHubSettings, get_settings
from ghpm.core.exceptions import SearchError
from ghpm.core.logger.logger import get_logger
from ghpm.models.repository import RepoSearchItem

logger = get_logger(__name__)

DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 50
USER_AGENT = "ghpm-cli"


def clamp_per_page(per_page: int | None) -> int:
    """Return ``per_page`` if within 1..50, else the default of 10."""
    if per_page is None or per_page < 1 or per_page > MAX_PER_PAGE:
        return DEFAULT_PER_PAGE
    return per_page


class GitHubSearchClient:
    """Client for ``GET /search/repositories``."""

    def __init__(
        self,
        settings: GitHubSettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the search client.

        Args:
            settings: GitHub settings. Uses global settings if not provided.
            client: Preconfigured HTTP client, e.g. one with a mock transport.
        """
        self.settings = settings or get_settings().github
        self.base_url = self.settings.api_base.rstrip("/")
        self._client = client

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self.settings.timeout)
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if self.settings.token:
            headers["Authorization"] = f"Bearer {self.settings.token}"
        return headers

    def search(self, query: str, per_page: int | None = None) -> list[RepoSearchItem]:
        """Search repositories matching ``query``.

        Args:
            query: Free-text search query.
            per_page: Number of results, 1..50. Out of range values fall
                back to 10.

        Returns:
            Matching repositories in API order.

        Raises:
            SearchError: On transport errors, non-200 responses or an
                unexpected payload.
        """
        if per_page is None:
            per_page = self.settings.per_page
        params = {"q": query, "per_page": clamp_per_page(per_page)}
        client = self._get_client()

        logger.debug(f"Searching GitHub for '{query}' ({params['per_page']} results)")
        start_time = time.time()

        try:
            response = client.get(
                f"{self.base_url}/search/repositories",
                params=params,
                headers=self._headers(),
            )
        except httpx.TimeoutException as e:
            raise SearchError(f"Search timed out: {e}", query=query) from e
        except httpx.RequestError as e:
            raise SearchError(f"Search request failed: {e}", query=query) from e

        logger.debug(f"GitHub search answered in {time.time() - start_time:.2f}s")

        if response.status_code != 200:
            raise SearchError(
                f"GitHub API returned status {response.status_code}",
                query=query,
                status_code=response.status_code,
            )

        try:
            items = response.json().get("items", [])
            return [RepoSearchItem.model_validate(item) for item in items]
        except (ValueError, AttributeError, ValidationError) as e:
            raise SearchError(
                f"Failed to parse search response: {e}",
                query=query,
            ) from e

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> "GitHubSearchClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
