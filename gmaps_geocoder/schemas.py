from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_pascal


class ServiceNode(BaseModel):
    """
    Base for every node of the geocoding service document.

    Members the service sends as null are dropped before validation, so an absent
    node and a null node both fall back to an empty node.
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Status(ServiceNode):
    code: Optional[int] = Field(default=None, alias="code")


class AdministrativeArea(ServiceNode):
    administrative_area_name: Optional[str] = None


class Country(ServiceNode):
    country_name: Optional[str] = None
    country_name_code: Optional[str] = None
    administrative_area: AdministrativeArea = Field(default_factory=AdministrativeArea)


class AddressDetails(ServiceNode):
    accuracy: Optional[int] = None
    country: Country = Field(default_factory=Country)


class LatLonBox(ServiceNode):
    north: Optional[float] = Field(default=None, alias="north")
    south: Optional[float] = Field(default=None, alias="south")
    east: Optional[float] = Field(default=None, alias="east")
    west: Optional[float] = Field(default=None, alias="west")


class ExtendedData(ServiceNode):
    lat_lon_box: LatLonBox = Field(default_factory=LatLonBox)


class ServicePoint(ServiceNode):
    # [longitude, latitude] with an optional trailing altitude
    coordinates: list[float] = Field(default_factory=list, alias="coordinates")


class Placemark(ServiceNode):
    point: ServicePoint = Field(default_factory=ServicePoint)
    address_details: AddressDetails = Field(default_factory=AddressDetails)
    extended_data: ExtendedData = Field(default_factory=ExtendedData)


class ServiceDocument(ServiceNode):
    """Top level of the geocoding service's JSON answer"""

    status: Status = Field(default_factory=Status)
    placemark: list[Placemark] = Field(default_factory=list)

    @field_validator("placemark", mode="before")
    @classmethod
    def _empty_null_placemarks(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{} if item is None else item for item in value]
        return value


class CountryResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    code: Optional[str] = None
    administrative_area: Optional[str] = None


class PointResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    longitude: Optional[float] = None
    latitude: Optional[float] = None


class BoxResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    north: Optional[float] = None
    south: Optional[float] = None
    east: Optional[float] = None
    west: Optional[float] = None


class GeocodeResult(BaseModel):
    """Flat result of one geocode lookup"""

    model_config = ConfigDict(frozen=True)

    accuracy: Optional[int] = None
    country: CountryResult = Field(default_factory=CountryResult)
    point: PointResult = Field(default_factory=PointResult)
    box: BoxResult = Field(default_factory=BoxResult)

    def to_dict(self) -> dict:
        return self.model_dump()
