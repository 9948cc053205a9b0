"""PIN 코드 검증과 주변 랜드마크 조회를 조율하는 서비스."""

from __future__ import annotations

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.schemas.location import LandmarksResponse, LatLng, ValidationResponse
from app.services.landmark_ranker import rank_landmarks, resolve_radius
from app.services.location_resolver import LocationResolver
from app.services.maps_service import MapsServiceProtocol, TimeoutBoundMapsService
from app.services.pincode_validator import PinCodeValidator

logger = get_logger(__name__)

DEFAULT_EXTERNAL_TIMEOUT_SECONDS = 10.0
NO_LANDMARKS_MESSAGE = "No landmarks found in the specified area. Try increasing the search radius."


class LocationService:
    """지도 서비스 핸들 하나를 보유하고 두 가지 사용자 기능을 제공합니다.

    캐시나 재시도 없이 외부 호출마다 제한 시간만 적용합니다.
    외부 호출 실패는 `ExternalServiceError`로 전파되며, 부분 결과는 반환하지 않습니다.
    """

    def __init__(
        self,
        maps_service: MapsServiceProtocol,
        *,
        timeout_seconds: float = DEFAULT_EXTERNAL_TIMEOUT_SECONDS,
        place_type: str = "point_of_interest",
        country_restriction: str = "",
    ) -> None:
        self._maps_service = TimeoutBoundMapsService(maps_service, timeout_seconds)
        self._place_type = place_type
        self._validator = PinCodeValidator(self._maps_service, country_restriction=country_restriction)
        self._resolver = LocationResolver(self._maps_service, self._validator)

    @classmethod
    def from_settings(cls, maps_service: MapsServiceProtocol) -> LocationService:
        """애플리케이션 설정으로 서비스 인스턴스를 생성합니다."""
        settings = get_settings()
        timeout_policy = get_timeout_policy(settings)
        return cls(
            maps_service,
            timeout_seconds=timeout_policy.google_maps_timeout_seconds,
            place_type=settings.LANDMARK_PLACE_TYPE,
            country_restriction=settings.GOOGLE_MAPS_COUNTRY_RESTRICTION,
        )

    async def validate_pin_code(self, pin_code: str, city: str) -> ValidationResponse:
        """PIN 코드가 도시에 속하는지 검증합니다."""
        return await self._validator.validate(pin_code, city)

    async def get_landmarks(
        self,
        pin_code: str = "",
        city: str = "",
        address: str = "",
        radius: float | None = None,
    ) -> LandmarksResponse:
        """기준 위치를 확정하고 주변 랜드마크를 인기도 순으로 반환합니다."""
        resolution = await self._resolver.resolve(pin_code=pin_code, city=city, address=address)
        if not resolution.ok:
            logger.info("Location resolution failed: reason=%s message=%s", resolution.failure, resolution.message)
            return LandmarksResponse(success=False, message=resolution.message)

        location = resolution.location
        search_radius = resolve_radius(radius)
        candidates = await self._maps_service.nearby_search(location.coordinate, search_radius, self._place_type)
        landmarks = rank_landmarks(location.coordinate, candidates)

        if landmarks:
            message = f"Found {len(landmarks)} landmarks near {location.formatted_address}"
        else:
            message = NO_LANDMARKS_MESSAGE

        return LandmarksResponse(
            success=True,
            message=message,
            landmarks=landmarks,
            location=LatLng(lat=location.coordinate.lat, lng=location.coordinate.lng),
        )
