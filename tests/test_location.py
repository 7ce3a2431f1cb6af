from __future__ import annotations

import logging

import pytest

from core.entities import TripRequest
from core.location import LocationResolver, build_address, valid_coordinates
from core.providers.google import GoogleGeocoder


GEOCODE_URL = "https://geocode.test/json"


@pytest.fixture
def resolver():
    return LocationResolver(GoogleGeocoder(api_key="geo-key", base_url=GEOCODE_URL))


@pytest.mark.parametrize(
    "lat, lon, expected",
    [
        (25.76, -80.19, (25.76, -80.19)),
        ("25.76", "-80.19", (25.76, -80.19)),
        (0, -80.19, None),
        (None, -80.19, None),
        ("north", "west", None),
        (95.0, 10.0, None),
        (10.0, 181.0, None),
    ],
)
def test_valid_coordinates(lat, lon, expected):
    assert valid_coordinates(lat, lon) == expected


@pytest.mark.parametrize(
    "fields, expected",
    [
        ({"address": "1 Ocean Dr, Miami", "city": "Miami", "state": "FL"}, "1 Ocean Dr, Miami"),
        ({"city": "Miami", "state": "FL"}, "Miami, FL"),
        ({"city": "Miami"}, "Miami"),
        ({"city": "Miami", "state": "FL", "postal_code": "33139"}, "Miami, FL 33139"),
        ({"address": "1 Ocean Dr, Miami, FL 33139", "postal_code": "33139"}, "1 Ocean Dr, Miami, FL 33139"),
        ({"state": "FL", "postal_code": "33139"}, None),
        ({}, None),
    ],
)
def test_build_address(fields, expected):
    assert build_address(TripRequest(**fields)) == expected


def test_coordinates_pass_through_without_network(requests_mock, resolver):
    location = resolver.resolve(TripRequest(latitude=25.76, longitude=-80.19, city="Miami"))

    assert (location.latitude, location.longitude) == (25.76, -80.19)
    assert location.source == "request"
    assert requests_mock.call_count == 0


def test_geocodes_when_coordinates_missing(requests_mock, resolver):
    requests_mock.get(
        GEOCODE_URL,
        json={"status": "OK", "results": [{"geometry": {"location": {"lat": 25.79, "lng": -80.13}}}]},
    )

    location = resolver.resolve(TripRequest(latitude=0, longitude=0, city="Miami Beach", state="FL"))

    assert (location.latitude, location.longitude) == (25.79, -80.13)
    assert requests_mock.call_count == 1
    assert requests_mock.last_request.qs["address"] == ["miami beach, fl"]


def test_geocoding_failure_needs_fallback(requests_mock, resolver, caplog):
    requests_mock.get(GEOCODE_URL, json={"status": "ZERO_RESULTS", "results": []})

    with caplog.at_level(logging.WARNING):
        assert resolver.resolve(TripRequest(city="Atlantis")) is None

    assert requests_mock.call_count == 1
    assert "Atlantis" in caplog.text


def test_geocoding_http_error_needs_fallback(requests_mock, resolver):
    requests_mock.get(GEOCODE_URL, status_code=503, text="unavailable")

    assert resolver.resolve(TripRequest(city="Miami")) is None
    assert requests_mock.call_count == 1


def test_no_address_needs_fallback(requests_mock, resolver):
    assert resolver.resolve(TripRequest(property_name="Beach House")) is None
    assert requests_mock.call_count == 0


def test_missing_geocoder_needs_fallback(requests_mock):
    assert LocationResolver(None).resolve(TripRequest(city="Miami")) is None
    assert requests_mock.call_count == 0
