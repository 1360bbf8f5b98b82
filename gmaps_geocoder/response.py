import json
import logging
from typing import TYPE_CHECKING, Optional

from pydantic import ValidationError

from gmaps_geocoder.errors import (
    APIGeocodingError,
    APIMalformedRequestError,
    ResponseParseError,
)
from gmaps_geocoder.schemas import (
    AddressDetails,
    AdministrativeArea,
    BoxResult,
    Country,
    CountryResult,
    GeocodeResult,
    LatLonBox,
    Placemark,
    PointResult,
    ServiceDocument,
)

if TYPE_CHECKING:
    from gmaps_geocoder.request import Request

logger = logging.getLogger(__name__)

STATUS_MALFORMED_REQUEST = 400
STATUS_UNKNOWN_ADDRESS = 602


class Response:
    """
    One parsed answer from the geocoding service.

    A Response is parsed once, validated once, then read. Every accessor tolerates
    missing nodes and yields None for leaves the service did not send.
    """

    def __init__(self, document: ServiceDocument, request: Optional["Request"] = None):
        self.document = document
        self.request = request
        self.logger = request.logger if request is not None else logger
        self._validated = False

    @classmethod
    def parse(cls, raw_body: str | bytes, request: Optional["Request"] = None) -> "Response":
        """
        Parse a raw JSON body.

        Raises:
            ResponseParseError: The body is not JSON, or a node has the wrong shape
        """
        try:
            document = ServiceDocument.model_validate(json.loads(raw_body))
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            raise ResponseParseError(
                f"Could not parse geocoding response: {e}"
            ) from e
        return cls(document, request)

    def status(self) -> Optional[int]:
        return self.document.status.code

    def validate(self) -> None:
        status = self.status()
        if status == STATUS_MALFORMED_REQUEST:
            url = self._request_url()
            self.logger.warning("Geocoding service rejected the request as malformed")
            raise APIMalformedRequestError(
                "The GMaps Geo API has indicated that the request is not formed "
                f"correctly: ({url})\n\n{self.request!r}",
                status,
                url,
            )
        if status == STATUS_UNKNOWN_ADDRESS:
            url = self._request_url()
            self.logger.warning("Geocoding service could not geocode the query")
            raise APIGeocodingError(
                "The GMaps Geo API has indicated that it is not able to geocode "
                f"the request: ({url})\n\n{self.request!r}",
                status,
                url,
            )
        self._validated = True

    def to_result(self) -> GeocodeResult:
        if not self._validated:
            self.validate()

        return GeocodeResult(
            accuracy=self.accuracy,
            country=CountryResult(
                name=self.country_name,
                code=self.country_code,
                administrative_area=self.administrative_area_name,
            ),
            point=PointResult(longitude=self.longitude, latitude=self.latitude),
            box=self.box,
        )

    @property
    def box(self) -> BoxResult:
        box = self._lat_lon_box
        return BoxResult(north=box.north, south=box.south, east=box.east, west=box.west)

    @property
    def accuracy(self) -> Optional[int]:
        return self._address_details.accuracy

    @property
    def latitude(self) -> Optional[float]:
        coordinates = self._coordinates
        return coordinates[1] if len(coordinates) > 1 else None

    @property
    def longitude(self) -> Optional[float]:
        coordinates = self._coordinates
        return coordinates[0] if coordinates else None

    @property
    def country_name(self) -> Optional[str]:
        return self._country.country_name

    @property
    def country_code(self) -> Optional[str]:
        return self._country.country_name_code

    @property
    def administrative_area_name(self) -> Optional[str]:
        return self._administrative_area.administrative_area_name

    @property
    def _placemark(self) -> Placemark:
        placemarks = self.document.placemark
        return placemarks[0] if placemarks else Placemark()

    @property
    def _coordinates(self) -> list[float]:
        return self._placemark.point.coordinates

    @property
    def _address_details(self) -> AddressDetails:
        return self._placemark.address_details

    @property
    def _country(self) -> Country:
        return self._address_details.country

    @property
    def _administrative_area(self) -> AdministrativeArea:
        return self._country.administrative_area

    @property
    def _lat_lon_box(self) -> LatLonBox:
        return self._placemark.extended_data.lat_lon_box

    def _request_url(self) -> str:
        return self.request.build_url() if self.request is not None else "<unknown>"
