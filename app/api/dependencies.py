"""API 의존성 모음."""

from fastapi import Depends

from app.services.google_maps_service import get_google_maps_service
from app.services.location_service import LocationService
from app.services.maps_service import MapsServiceProtocol


def get_maps_service() -> MapsServiceProtocol:
    """프로세스 단위로 공유되는 지도 서비스 핸들을 제공합니다."""
    return get_google_maps_service()


def get_location_service(
    maps_service: MapsServiceProtocol = Depends(get_maps_service),
) -> LocationService:
    """요청마다 새 `LocationService`를 만들어 지도 서비스 핸들을 주입합니다."""
    return LocationService.from_settings(maps_service)
