"""Google Maps Platform(Geocoding, Places Nearby Search) 서비스 구현."""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Any

import requests

from app.core.config import get_settings
from app.core.errors import ExternalServiceError
from app.core.geo import Coordinate
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy, to_requests_timeout
from app.schemas.place import AddressComponent, GeocodeResult, PlaceCandidate, PlaceGeometry
from app.services.maps_service import MapsServiceProtocol

logger = get_logger(__name__)


class GoogleMapsError(ExternalServiceError):
    """Google Maps 호출 실패 시 발생하는 예외."""

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        provider_status: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.provider_status = provider_status
        self.status_code = status_code


class GoogleMapsService(MapsServiceProtocol):
    """Google Maps Web Service API 기반 지도 서비스."""

    _BASE_URL = "https://maps.googleapis.com/maps/api"
    _GEOCODE_PATH = "/geocode/json"
    _NEARBY_SEARCH_PATH = "/place/nearbysearch/json"
    _SUCCESS_STATUSES = frozenset({"OK", "ZERO_RESULTS"})

    def __init__(
        self,
        api_key: str,
        timeout_seconds: int = 10,
        language_code: str = "en",
        region_code: str = "in",
    ) -> None:
        if not api_key:
            raise GoogleMapsError("GOOGLE_MAPS_API_KEY is not configured.")
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._language_code = language_code.strip() if language_code else ""
        self._region_code = region_code.strip() if region_code else ""

    def close(self) -> None:
        """리소스를 정리합니다(컨텍스트 매니저 대칭성 유지)."""
        return None

    def __enter__(self) -> GoogleMapsService:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @classmethod
    def from_settings(cls) -> GoogleMapsService:
        """애플리케이션 설정으로 서비스 인스턴스를 생성합니다."""
        settings = get_settings()
        timeout_policy = get_timeout_policy(settings)
        return cls(
            api_key=settings.GOOGLE_MAPS_API_KEY,
            timeout_seconds=timeout_policy.google_maps_timeout_seconds,
            language_code=settings.GOOGLE_MAPS_LANGUAGE_CODE,
            region_code=settings.GOOGLE_MAPS_REGION_CODE,
        )

    async def geocode(self, query: str, components: dict[str, str] | None = None) -> list[GeocodeResult]:
        """주소 또는 PIN 코드를 지오코딩합니다."""
        query = (query or "").strip()
        if not query and not components:
            return []

        params: dict[str, Any] = {}
        if query:
            params["address"] = query
        if components:
            params["components"] = "|".join(f"{key}:{value}" for key, value in components.items() if value)
        if self._language_code:
            params["language"] = self._language_code
        if self._region_code:
            params["region"] = self._region_code

        data = await self._request(self._GEOCODE_PATH, params, operation="geocode")
        results = [result for result in (self._map_geocode_result(item) for item in data.get("results", [])) if result]
        logger.info("Google geocoding completed: query=%s components=%s results=%d", query, components, len(results))
        return results

    async def nearby_search(self, center: Coordinate, radius_m: float, place_type: str) -> list[PlaceCandidate]:
        """중심 좌표 주변 장소를 검색합니다."""
        radius = max(1, int(radius_m))
        params: dict[str, Any] = {
            "location": center.to_query_param(),
            "radius": radius,
        }
        if place_type:
            params["type"] = place_type
        if self._language_code:
            params["language"] = self._language_code

        data = await self._request(self._NEARBY_SEARCH_PATH, params, operation="nearby_search")
        raw_results = data.get("results", [])
        candidates = [place for place in (self._map_place(item) for item in raw_results) if place]
        logger.info(
            "Google nearby search completed: center=%s radius=%d type=%s raw_count=%d candidate_count=%d",
            center.to_query_param(),
            radius,
            place_type,
            len(raw_results),
            len(candidates),
        )
        return candidates

    async def _request(self, path: str, params: dict[str, Any], *, operation: str) -> dict[str, Any]:
        request_params = {**params, "key": self._api_key}
        request_timeout = to_requests_timeout(self._timeout_seconds)
        url = f"{self._BASE_URL}{path}"

        def _send() -> requests.Response:
            with requests.Session() as session:
                return session.get(url, params=request_params, timeout=request_timeout)

        try:
            response = await asyncio.to_thread(_send)
            response.raise_for_status()
            data = response.json()
        except requests.HTTPError as exc:
            response = exc.response
            status_code = response.status_code if response is not None else None
            body = (response.text or "")[:200] if response is not None else ""
            logger.error("Google Maps API error: operation=%s status=%s body=%s", operation, status_code, body)
            raise GoogleMapsError(
                f"{operation} failed with HTTP status {status_code}",
                operation=operation,
                status_code=status_code,
            ) from exc
        except requests.Timeout as exc:
            logger.error("Google Maps API request timed out: operation=%s error=%s", operation, exc)
            raise GoogleMapsError(f"{operation} request timed out", operation=operation) from exc
        except requests.RequestException as exc:
            logger.error("Google Maps API request failed: operation=%s error=%s", operation, exc)
            raise GoogleMapsError(f"{operation} request failed: {exc}", operation=operation) from exc
        except ValueError as exc:
            logger.error("Google Maps API response parse failed: operation=%s error=%s", operation, exc)
            raise GoogleMapsError(f"{operation} returned an unreadable response", operation=operation) from exc

        if not isinstance(data, dict):
            raise GoogleMapsError(f"{operation} returned an unexpected payload", operation=operation)

        provider_status = str(data.get("status") or "")
        if provider_status not in self._SUCCESS_STATUSES:
            error_message = data.get("error_message") or ""
            logger.error(
                "Google Maps API rejected request: operation=%s provider_status=%s error_message=%s",
                operation,
                provider_status,
                error_message,
            )
            raise GoogleMapsError(
                f"{operation} failed: {provider_status or 'UNKNOWN'}",
                operation=operation,
                provider_status=provider_status,
            )
        return data

    @staticmethod
    def _map_location(raw: dict[str, Any]) -> PlaceGeometry | None:
        location = (raw.get("geometry") or {}).get("location") or {}
        lat = location.get("lat")
        lng = location.get("lng")
        if lat is None or lng is None:
            return None
        return PlaceGeometry(lat=lat, lng=lng)

    def _map_geocode_result(self, raw: dict[str, Any]) -> GeocodeResult | None:
        location = self._map_location(raw)
        if location is None:
            logger.warning("Skipping geocode result without coordinates: %s", raw.get("formatted_address"))
            return None

        components = [
            AddressComponent(
                long_name=component.get("long_name") or "",
                short_name=component.get("short_name"),
                types=component.get("types") or [],
            )
            for component in raw.get("address_components") or []
            if component.get("long_name")
        ]
        return GeocodeResult(
            formatted_address=raw.get("formatted_address") or "",
            address_components=components,
            location=location,
        )

    def _map_place(self, raw: dict[str, Any]) -> PlaceCandidate | None:
        name = raw.get("name")
        place_id = raw.get("place_id")
        location = self._map_location(raw)

        if not (name and place_id and location is not None):
            logger.warning("Skipping nearby place with missing fields: place_id=%s name=%s", place_id, name)
            return None

        return PlaceCandidate(
            place_id=place_id,
            name=name,
            vicinity=raw.get("vicinity") or "",
            types=raw.get("types") or [],
            rating=raw.get("rating"),
            user_ratings_total=raw.get("user_ratings_total") or 0,
            location=location,
        )


@lru_cache(maxsize=1)
def get_google_maps_service() -> GoogleMapsService:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return GoogleMapsService.from_settings()
