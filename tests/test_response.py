import json
from pathlib import Path

import pytest

from gmaps_geocoder.errors import (
    APIGeocodingError,
    APIMalformedRequestError,
    ResponseParseError,
)
from gmaps_geocoder.request import Request
from gmaps_geocoder.response import Response

EMPTY_RESULT = {
    "accuracy": None,
    "country": {"name": None, "code": None, "administrative_area": None},
    "point": {"longitude": None, "latitude": None},
    "box": {"north": None, "south": None, "east": None, "west": None},
}


@pytest.fixture
def fixture_dir():
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def seattle_body(fixture_dir):
    return (fixture_dir / "seattle_response.json").read_text()


@pytest.fixture
def request_for_errors():
    return Request("Nowhere", {"api_key": "K", "timeout_seconds": 5})


def test_to_result_from_fixture(seattle_body):
    """Test extraction uses only the first placemark"""
    result = Response.parse(seattle_body).to_result()

    assert result.to_dict() == {
        "accuracy": 4,
        "country": {"name": "USA", "code": "US", "administrative_area": "WA"},
        "point": {"longitude": -122.3320708, "latitude": 47.6062095},
        "box": {
            "north": 47.7341503,
            "south": 47.4955511,
            "east": -122.2244331,
            "west": -122.4596959,
        },
    }


def test_status_read_from_document(seattle_body):
    assert Response.parse(seattle_body).status() == 200


def test_status_missing_is_none():
    response = Response.parse("{}")

    assert response.status() is None
    response.validate()


def test_validate_status_400(request_for_errors):
    response = Response.parse('{"Status": {"code": 400}}', request_for_errors)

    with pytest.raises(APIMalformedRequestError) as excinfo:
        response.validate()

    assert excinfo.value.status == 400
    assert excinfo.value.url == request_for_errors.build_url()
    assert request_for_errors.build_url() in str(excinfo.value)


def test_validate_status_602(fixture_dir, request_for_errors):
    body = (fixture_dir / "unknown_address_response.json").read_text()
    response = Response.parse(body, request_for_errors)

    with pytest.raises(APIGeocodingError, match="not able to geocode") as excinfo:
        response.validate()

    assert excinfo.value.status == 602
    assert request_for_errors.build_url() in str(excinfo.value)


@pytest.mark.parametrize("status", [200, 500, 601, 610, 620])
def test_validate_other_statuses_pass(status):
    Response.parse(json.dumps({"Status": {"code": status}})).validate()


def test_to_result_validates_first():
    """Test that extraction is never reached for a failed status"""
    response = Response.parse('{"Status": {"code": 602}, "Placemark": []}')

    with pytest.raises(APIGeocodingError):
        response.to_result()


def test_empty_placemark_list_yields_empty_result():
    response = Response.parse('{"Status": {"code": 200}, "Placemark": []}')

    assert response.to_result().to_dict() == EMPTY_RESULT


def test_missing_placemark_yields_empty_result():
    response = Response.parse('{"Status": {"code": 200}}')

    assert response.to_result().to_dict() == EMPTY_RESULT


def test_null_nodes_treated_as_empty():
    body = {
        "Status": {"code": 200},
        "Placemark": [
            {
                "Point": None,
                "AddressDetails": {"Accuracy": 1, "Country": None},
                "ExtendedData": {"LatLonBox": None},
            }
        ],
    }
    result = Response.parse(json.dumps(body)).to_result()

    assert result.accuracy == 1
    assert result.country.name is None
    assert result.point.longitude is None
    assert result.box.north is None


def test_null_placemark_entry_treated_as_empty():
    response = Response.parse('{"Status": {"code": 200}, "Placemark": [null]}')

    assert response.to_result().to_dict() == EMPTY_RESULT


def test_null_placemark_entries_after_first_are_ignored(seattle_body):
    body = json.loads(seattle_body)
    body["Placemark"].append(None)

    assert Response.parse(json.dumps(body)).country_name == "USA"


def test_unread_members_do_not_affect_parsing():
    """Test that members the mapper never reads are not type-checked"""
    body = {
        "name": 123,
        "Status": {"code": 200, "request": ["geocode"]},
        "Placemark": [{"address": {"line": 1}, "AddressDetails": {"Accuracy": 6}}],
    }

    assert Response.parse(json.dumps(body)).accuracy == 6


def test_partial_nodes():
    """Test each level of the chain defaulting independently"""
    body = {
        "Status": {"code": 200},
        "Placemark": [
            {
                "Point": {"coordinates": [2.35]},
                "AddressDetails": {"Country": {"CountryNameCode": "FR"}},
                "ExtendedData": {"LatLonBox": {"north": 48.9}},
            }
        ],
    }
    response = Response.parse(json.dumps(body))

    assert response.longitude == 2.35
    assert response.latitude is None
    assert response.accuracy is None
    assert response.country_code == "FR"
    assert response.country_name is None
    assert response.administrative_area_name is None
    assert response.box.north == 48.9
    assert response.box.south is None


@pytest.mark.parametrize("body", ["", "not json", "{'Status': 200}", "<html></html>"])
def test_parse_rejects_invalid_json(body):
    with pytest.raises(ResponseParseError):
        Response.parse(body)


@pytest.mark.parametrize(
    "body",
    [
        "[]",
        '{"Status": "OK"}',
        '{"Placemark": {"Point": {}}}',
        '{"Placemark": [{"AddressDetails": {"Country": "USA"}}]}',
    ],
)
def test_parse_rejects_wrong_node_shapes(body):
    """Test that present but wrongly typed nodes are surfaced, not masked"""
    with pytest.raises(ResponseParseError):
        Response.parse(body)


def test_parse_accepts_bytes(seattle_body):
    response = Response.parse(seattle_body.encode("utf-8"))

    assert response.country_name == "USA"
