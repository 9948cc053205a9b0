"""Google Maps Fake 서비스.

실제 API 호출 없이 미리 등록된 지오코딩/주변 검색 결과를 반환한다.
호출 기록을 남기므로 외부 호출 여부와 인자를 검증할 수 있다.
"""

from __future__ import annotations

import asyncio

from app.core.geo import Coordinate
from app.schemas.place import AddressComponent, GeocodeResult, PlaceCandidate, PlaceGeometry
from app.services.maps_service import MapsServiceProtocol

KANPUR_CENTER = (26.4499, 80.3319)


def make_geocode_result(
    formatted_address: str,
    lat: float = KANPUR_CENTER[0],
    lng: float = KANPUR_CENTER[1],
    *,
    locality: str | None = None,
    district: str | None = None,
    state: str | None = "Uttar Pradesh",
    country: str | None = "India",
    postal_code: str | None = None,
) -> GeocodeResult:
    """주소 구성요소를 가진 지오코딩 결과를 만든다."""
    components: list[AddressComponent] = []
    if postal_code:
        components.append(AddressComponent(long_name=postal_code, types=["postal_code"]))
    if locality:
        components.append(AddressComponent(long_name=locality, types=["locality", "political"]))
    if district:
        components.append(AddressComponent(long_name=district, types=["administrative_area_level_2", "political"]))
    if state:
        components.append(AddressComponent(long_name=state, types=["administrative_area_level_1", "political"]))
    if country:
        components.append(AddressComponent(long_name=country, short_name="IN", types=["country", "political"]))
    return GeocodeResult(
        formatted_address=formatted_address,
        address_components=components,
        location=PlaceGeometry(lat=lat, lng=lng),
    )


def make_place(
    place_id: str,
    name: str,
    lat: float,
    lng: float,
    *,
    rating: float | None = 4.0,
    user_ratings_total: int = 100,
    types: list[str] | None = None,
) -> PlaceCandidate:
    """주변 검색 후보를 만든다."""
    return PlaceCandidate(
        place_id=place_id,
        name=name,
        vicinity=f"{name}, Kanpur",
        types=types or ["tourist_attraction", "point_of_interest"],
        rating=rating,
        user_ratings_total=user_ratings_total,
        location=PlaceGeometry(lat=lat, lng=lng),
    )


class FakeMapsService(MapsServiceProtocol):
    """등록된 결과를 돌려주는 Fake 지도 서비스."""

    def __init__(
        self,
        geocode_results: dict[str, list[GeocodeResult]] | None = None,
        nearby_results: list[PlaceCandidate] | None = None,
        *,
        delay_seconds: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.geocode_results = geocode_results or {}
        self.nearby_results = nearby_results or []
        self.delay_seconds = delay_seconds
        self.error = error
        self.geocode_calls: list[tuple[str, dict[str, str] | None]] = []
        self.nearby_calls: list[tuple[Coordinate, float, str]] = []

    async def geocode(self, query: str, components: dict[str, str] | None = None) -> list[GeocodeResult]:
        self.geocode_calls.append((query, components))
        await self._simulate_latency()
        return list(self.geocode_results.get(query, []))

    async def nearby_search(self, center: Coordinate, radius_m: float, place_type: str) -> list[PlaceCandidate]:
        self.nearby_calls.append((center, radius_m, place_type))
        await self._simulate_latency()
        return list(self.nearby_results)

    async def _simulate_latency(self) -> None:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
