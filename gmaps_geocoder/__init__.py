from logging import Logger
from typing import Any, Mapping, Optional

import httpx

from gmaps_geocoder.config import GeocoderConfig, merge, settings
from gmaps_geocoder.errors import (
    APIError,
    APIGeocodingError,
    APIMalformedRequestError,
    BlankRequestError,
    ConfigurationError,
    GeocodingError,
    MalformedQueryError,
    NoAPIKeyError,
    RequestTimeoutError,
    ResponseParseError,
)
from gmaps_geocoder.request import Request
from gmaps_geocoder.response import Response
from gmaps_geocoder.schemas import GeocodeResult


def geocode(
    query: Any,
    options: Mapping[str, Any] | GeocoderConfig | None = None,
    *,
    logger: Optional[Logger] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GeocodeResult:
    """Resolve a free-text location to coordinates, country and bounding box"""
    return Request.get(query, options, logger=logger, transport=transport)


async def geocode_async(
    query: Any,
    options: Mapping[str, Any] | GeocoderConfig | None = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    logger: Optional[Logger] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GeocodeResult:
    return await Request.get_async(
        query, options, client=client, logger=logger, transport=transport
    )


__all__ = [
    "APIError",
    "APIGeocodingError",
    "APIMalformedRequestError",
    "BlankRequestError",
    "ConfigurationError",
    "GeocodeResult",
    "GeocoderConfig",
    "GeocodingError",
    "MalformedQueryError",
    "NoAPIKeyError",
    "Request",
    "RequestTimeoutError",
    "Response",
    "ResponseParseError",
    "geocode",
    "geocode_async",
    "merge",
    "settings",
]
