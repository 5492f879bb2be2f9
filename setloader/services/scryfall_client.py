"""
Scryfall catalog API client.

Fetches set metadata and paginated card searches. Every request goes through
the client's RateLimiter; Scryfall asks for 50-100ms between requests.

API docs: https://scryfall.com/docs/api
"""

import logging
from collections.abc import AsyncIterator
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from setloader.config import Settings, settings
from setloader.models.scryfall import (
    ScryfallCard,
    ScryfallCardList,
    ScryfallErrorBody,
    ScryfallSet,
)
from setloader.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

MALFORMED_RESPONSE = "malformed_response"
TRANSPORT_ERROR = "transport_error"


class CatalogError(Exception):
    """
    Raised when the Scryfall API returns a non-success or unusable response.

    Attributes:
        code: Scryfall error code (e.g. "not_found") or a local code for
            malformed bodies and transport failures
        status: HTTP status, None when no response was received
        details: Human-readable explanation, verbatim from Scryfall when present
    """

    def __init__(self, code: str, status: int | None, details: str) -> None:
        self.code = code
        self.status = status
        self.details = details
        super().__init__(f"Scryfall API error: {details} ({code})")


class ScryfallClient:
    """Rate-limited async client for the Scryfall API.

    Usage:
        async with ScryfallClient() as client:
            cards = await client.search_cards_in_set("dsk")
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        rate_limiter: RateLimiter | None = None,
        *,
        base_url: str | None = None,
        config: Settings | None = None,
    ) -> None:
        config = config or settings
        self.base_url = (base_url or config.scryfall_api_base).rstrip("/")
        self.rate_limiter = rate_limiter or RateLimiter(config.request_delay_seconds)
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            headers={"User-Agent": config.user_agent, "Accept": "application/json"},
            timeout=httpx.Timeout(config.http_timeout_seconds),
            follow_redirects=True,
        )

    async def __aenter__(self) -> "ScryfallClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Rate-limited GET returning the decoded JSON body."""
        await self.rate_limiter.acquire()
        logger.debug("GET %s %s", url, params or "")

        try:
            response = await self._http.get(url, params=params)
        except httpx.RequestError as e:
            raise CatalogError(TRANSPORT_ERROR, None, f"Request to {url} failed: {e}") from e

        if not response.is_success:
            raise _error_from_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise CatalogError(
                MALFORMED_RESPONSE, response.status_code, f"Response from {url} is not JSON"
            ) from e

    async def fetch_set_metadata(self, set_code: str) -> ScryfallSet:
        """
        Fetch set metadata.

        Args:
            set_code: Set code (e.g., "dsk")

        Raises:
            CatalogError: If the request fails or the body is not a set object
        """
        data = await self._get_json(f"{self.base_url}/sets/{set_code}")
        try:
            return ScryfallSet.model_validate(data)
        except ValidationError as e:
            raise CatalogError(
                MALFORMED_RESPONSE, 200, f"Unexpected set payload for {set_code}: {e}"
            ) from e

    async def iter_set_card_pages(self, set_code: str) -> AsyncIterator[list[ScryfallCard]]:
        """
        Yield search result pages for every printing in a set, in set order.

        Follows ``next_page`` until a page omits it. Nothing is fetched until
        iteration starts, and each new iteration starts again from page one.

        Raises:
            CatalogError: If any page fails
        """
        url: str | None = f"{self.base_url}/cards/search"
        params: dict[str, str] | None = {
            "q": f"set:{set_code}",
            "unique": "prints",
            "order": "set",
        }
        fetched = 0

        while url:
            data = await self._get_json(url, params)
            try:
                page = ScryfallCardList.model_validate(data)
            except ValidationError as e:
                raise CatalogError(
                    MALFORMED_RESPONSE, 200, f"Unexpected search payload for {set_code}: {e}"
                ) from e

            fetched += len(page.data)
            if page.has_more:
                logger.info(
                    "Fetched %d/%s cards from %s...",
                    fetched,
                    page.total_cards if page.total_cards is not None else "?",
                    set_code,
                )

            yield page.data

            # next_page already carries the query string
            url = page.next_page
            params = None

    async def iter_set_cards(self, set_code: str) -> AsyncIterator[ScryfallCard]:
        """Yield every printing in a set one card at a time."""
        async for page in self.iter_set_card_pages(set_code):
            for card in page:
                yield card

    async def search_cards_in_set(self, set_code: str) -> list[ScryfallCard]:
        """
        Fetch all printings in a set.

        Results from earlier pages are discarded if a later page fails.

        Raises:
            CatalogError: If any page fails
        """
        cards: list[ScryfallCard] = []
        async for page in self.iter_set_card_pages(set_code):
            cards.extend(page)

        logger.info("Successfully fetched %d cards from set %s", len(cards), set_code)
        return cards


def _error_from_response(response: httpx.Response) -> CatalogError:
    """Build a CatalogError from a non-2xx response, preserving Scryfall's fields."""
    try:
        body = ScryfallErrorBody.model_validate(response.json())
    except (ValueError, ValidationError):
        return CatalogError(
            MALFORMED_RESPONSE,
            response.status_code,
            f"HTTP {response.status_code} from {response.request.url} with unparseable error body",
        )
    return CatalogError(body.code, body.status, body.details)
