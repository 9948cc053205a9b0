"""PIN 코드 검증/랜드마크 조회 조율 서비스 테스트."""

from __future__ import annotations

import asyncio

import pytest

from app.core.config import get_settings
from app.core.errors import ExternalServiceError, ExternalServiceTimeoutError
from app.core.geo import Coordinate
from app.services.location_resolver import MISSING_INPUT_MESSAGE
from app.services.location_service import NO_LANDMARKS_MESSAGE, LocationService
from app.services.maps_service import TimeoutBoundMapsService
from tests.mocks.fake_maps_service import KANPUR_CENTER, FakeMapsService, make_geocode_result, make_place

ADDRESS = "Mall Road, Kanpur"
FORMATTED = "Mall Rd, Kanpur, Uttar Pradesh 208001, India"


def _near(meters_north: float) -> tuple[float, float]:
    return KANPUR_CENTER[0] + meters_north / 111_195, KANPUR_CENTER[1]


def _fake_with_places(**kwargs) -> FakeMapsService:
    return FakeMapsService(
        geocode_results={ADDRESS: [make_geocode_result(FORMATTED, locality="Kanpur")]},
        nearby_results=[
            make_place("p1", "Green Park", *_near(200), rating=4.5, user_ratings_total=5000),
            make_place("p2", "Phool Bagh", *_near(700), rating=4.2, user_ratings_total=3000),
            make_place("p3", "Empty Lot", *_near(300), user_ratings_total=0),
        ],
        **kwargs,
    )


def test_get_landmarks_by_address() -> None:
    fake = _fake_with_places()
    service = LocationService(fake)

    response = asyncio.run(service.get_landmarks(address=ADDRESS, radius=1500))

    assert response.success is True
    assert response.message == f"Found 2 landmarks near {FORMATTED}"
    assert [landmark.place_id for landmark in response.landmarks] == ["p1", "p2"]
    assert response.location.lat == KANPUR_CENTER[0]
    assert response.location.lng == KANPUR_CENTER[1]
    assert fake.nearby_calls == [(Coordinate(*KANPUR_CENTER), 1500, "point_of_interest")]


@pytest.mark.parametrize("radius", [None, 0])
def test_get_landmarks_defaults_radius(radius) -> None:
    fake = _fake_with_places()
    service = LocationService(fake, place_type="tourist_attraction")

    asyncio.run(service.get_landmarks(address=ADDRESS, radius=radius))

    assert fake.nearby_calls[0][1] == 1000.0
    assert fake.nearby_calls[0][2] == "tourist_attraction"


def test_get_landmarks_without_candidates_is_still_success() -> None:
    fake = FakeMapsService(geocode_results={ADDRESS: [make_geocode_result(FORMATTED, locality="Kanpur")]})
    service = LocationService(fake)

    response = asyncio.run(service.get_landmarks(address=ADDRESS))

    assert response.success is True
    assert response.message == NO_LANDMARKS_MESSAGE
    assert response.landmarks == []
    assert response.location.lat == KANPUR_CENTER[0]


def test_get_landmarks_missing_input_is_soft_failure() -> None:
    fake = FakeMapsService()
    service = LocationService(fake)

    response = asyncio.run(service.get_landmarks())

    assert response.success is False
    assert response.message == MISSING_INPUT_MESSAGE
    assert response.landmarks == []
    assert response.location.lat == 0.0
    assert response.location.lng == 0.0
    assert fake.geocode_calls == []
    assert fake.nearby_calls == []


def test_get_landmarks_pin_code_mismatch_skips_nearby_search() -> None:
    fake = FakeMapsService(geocode_results={"208001": [make_geocode_result("Kanpur", locality="Kanpur")]})
    service = LocationService(fake)

    response = asyncio.run(service.get_landmarks(pin_code="208001", city="Delhi"))

    assert response.success is False
    assert response.message == "PIN code 208001 does not belong to delhi"
    assert fake.nearby_calls == []


def test_get_landmarks_by_pin_code() -> None:
    fake = FakeMapsService(
        geocode_results={
            "208001": [make_geocode_result("Kanpur, Uttar Pradesh 208001, India", locality="Kanpur")],
            "208001, Kanpur": [make_geocode_result("Kanpur, Uttar Pradesh 208001, India", locality="Kanpur")],
        },
        nearby_results=[make_place("p1", "Green Park", *_near(200))],
    )
    service = LocationService(fake)

    response = asyncio.run(service.get_landmarks(pin_code="208001", city="Kanpur"))

    assert response.success is True
    assert len(response.landmarks) == 1
    assert [query for query, _ in fake.geocode_calls] == ["208001", "208001, Kanpur"]


def test_validate_pin_code_delegates_to_validator() -> None:
    fake = FakeMapsService(geocode_results={"208001": [make_geocode_result("Kanpur", locality="Kanpur")]})
    service = LocationService(fake, country_restriction="in")

    response = asyncio.run(service.validate_pin_code("208001", "Kanpur"))

    assert response.valid is True
    assert fake.geocode_calls == [("208001", {"postal_code": "208001", "country": "in"})]


def test_slow_geocode_raises_timeout_error() -> None:
    fake = _fake_with_places(delay_seconds=0.5)
    service = LocationService(fake, timeout_seconds=0.01)

    with pytest.raises(ExternalServiceTimeoutError) as exc_info:
        asyncio.run(service.get_landmarks(address=ADDRESS))

    assert exc_info.value.operation == "geocode"


def test_slow_validation_raises_timeout_error() -> None:
    fake = FakeMapsService(delay_seconds=0.5)
    service = LocationService(fake, timeout_seconds=0.01)

    with pytest.raises(ExternalServiceTimeoutError):
        asyncio.run(service.validate_pin_code("208001", "Kanpur"))


def test_external_error_is_not_swallowed() -> None:
    fake = _fake_with_places(error=ExternalServiceError("nearby search failed: OVER_QUERY_LIMIT"))
    service = LocationService(fake)

    with pytest.raises(ExternalServiceError, match="OVER_QUERY_LIMIT"):
        asyncio.run(service.get_landmarks(address=ADDRESS))


def test_timeout_bound_service_passes_results_through() -> None:
    fake = _fake_with_places()
    bounded = TimeoutBoundMapsService(fake, timeout_seconds=1.0)

    results = asyncio.run(bounded.geocode(ADDRESS))

    assert bounded.timeout_seconds == 1.0
    assert [result.formatted_address for result in results] == [FORMATTED]


def test_from_settings_uses_configured_values(monkeypatch) -> None:
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "test-key")
    monkeypatch.setenv("GOOGLE_MAPS_TIMEOUT_SECONDS", "2")
    monkeypatch.setenv("LANDMARK_PLACE_TYPE", "tourist_attraction")
    monkeypatch.setenv("GOOGLE_MAPS_COUNTRY_RESTRICTION", " IN ")
    get_settings.cache_clear()

    fake = _fake_with_places()
    try:
        service = LocationService.from_settings(fake)
        asyncio.run(service.get_landmarks(address=ADDRESS))
        asyncio.run(service.validate_pin_code("208001", "Kanpur"))
    finally:
        get_settings.cache_clear()

    assert fake.nearby_calls[0][2] == "tourist_attraction"
    assert fake.geocode_calls[-1] == ("208001", {"postal_code": "208001", "country": "in"})
