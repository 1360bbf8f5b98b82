import asyncio
import logging
from logging import Logger
from typing import Any, Mapping, Optional

import httpx

from gmaps_geocoder import config as geocoder_config
from gmaps_geocoder.config import GeocoderConfig
from gmaps_geocoder.encoding import to_query_string
from gmaps_geocoder.errors import (
    BlankRequestError,
    MalformedQueryError,
    NoAPIKeyError,
    RequestTimeoutError,
)
from gmaps_geocoder.response import Response
from gmaps_geocoder.schemas import GeocodeResult

BASE_URL = "http://maps.google.com/maps/geo"

# Order matters: parameters are emitted in this order
BASE_PARAMS: dict[str, Optional[str]] = {
    "q": None,
    "output": "json",
    "oe": "utf8",
    "sensor": "false",
    "key": None,
}


class Request:
    """A single, validated geocode lookup"""

    def __init__(
        self,
        query: Any,
        options: Mapping[str, Any] | GeocoderConfig | None = None,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if query is None:
            raise BlankRequestError("query cannot be None")
        if not isinstance(query, str):
            raise MalformedQueryError(
                f"query must be str, not: {type(query).__name__}"
            )

        self.config = geocoder_config.merge(options)
        self.raw_query = query
        self.client = client
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)
        self._validate_state()

    @classmethod
    def get(
        cls,
        query: Any,
        options: Mapping[str, Any] | GeocoderConfig | None = None,
        logger: Optional[Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> GeocodeResult:
        """
        Build, send, validate and extract a geocode lookup (blocking).

        Each call runs on its own event loop with its own httpx client, so an
        existing AsyncClient cannot be shared here; pass a transport instead.
        """
        return asyncio.run(
            cls.get_async(query, options, logger=logger, transport=transport)
        )

    @classmethod
    async def get_async(
        cls,
        query: Any,
        options: Mapping[str, Any] | GeocoderConfig | None = None,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> GeocodeResult:
        request = cls(query, options, client=client, logger=logger, transport=transport)
        response = Response.parse(await request.fetch(), request)
        response.validate()
        result = response.to_result()

        request.logger.info(
            "Geocoded %r (accuracy=%s)", request.effective_query(), result.accuracy
        )
        return result

    def effective_query(self) -> str:
        """The query with the configured suffix appended, if any"""
        if self.config.append_query is not None:
            return f"{self.raw_query} {self.config.append_query}"
        return self.raw_query

    def params(self) -> dict[str, Optional[str]]:
        return {**BASE_PARAMS, "q": self.effective_query(), "key": self.config.api_key}

    def to_params(self) -> str:
        return to_query_string(self.params().items())

    def build_url(self) -> str:
        return f"{BASE_URL}?{self.to_params()}"

    def redacted_url(self) -> str:
        """The request URL with the API key masked, for logs and repr()"""
        params = {**self.params(), "key": "***"}
        return f"{BASE_URL}?{to_query_string(params.items())}"

    async def fetch(self) -> str:
        """
        Send the lookup and return the raw response body.

        The whole round-trip, connection included, is bounded by timeout_seconds.

        Raises:
            RequestTimeoutError: The service did not answer in time
            httpx.HTTPError: Any other transport failure or an HTTP error status
        """
        timeout = self.config.timeout_seconds
        self.logger.debug("GET %s (timeout=%ss)", self.redacted_url(), timeout)

        try:
            return await asyncio.wait_for(self._http_get(), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            self.logger.warning(
                "Geocode request for %r timed out after %ss",
                self.effective_query(),
                timeout,
            )
            raise RequestTimeoutError(
                f"The query timed out at {timeout} second(s)", timeout
            ) from e

    def execute(self) -> str:
        """
        Blocking version of fetch().

        Runs on a fresh event loop, which an injected AsyncClient is not bound to.
        """
        if self.client is not None:
            raise ValueError(
                "execute() cannot use an injected AsyncClient; "
                "pass a transport instead, or await fetch()"
            )
        return asyncio.run(self.fetch())

    async def _http_get(self) -> str:
        if self.client is not None:
            return await self._read(self.client)

        async with httpx.AsyncClient(
            transport=self.transport,
            timeout=httpx.Timeout(self.config.timeout_seconds),
            follow_redirects=True,
        ) as client:
            return await self._read(client)

    async def _read(self, client: httpx.AsyncClient) -> str:
        response = await client.get(self.build_url())
        response.raise_for_status()
        return response.text

    def _validate_state(self) -> None:
        if not self.effective_query().strip():
            raise BlankRequestError("You must specify a query to resolve.")
        if not self.config.api_key:
            raise NoAPIKeyError(
                "You must provide a Google Maps API key in your configuration "
                "(api_key option or GMAPS_GEOCODER_API_KEY)."
            )

    def __repr__(self) -> str:
        return (
            f"<Request query={self.effective_query()!r} "
            f"timeout_seconds={self.config.timeout_seconds} url={self.redacted_url()!r}>"
        )
