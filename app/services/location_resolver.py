"""주소 또는 PIN 코드 + 도시 입력을 하나의 좌표로 확정하는 서비스."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.core.geo import Coordinate
from app.core.logger import get_logger
from app.schemas.place import GeocodeResult
from app.services.maps_service import MapsServiceProtocol
from app.services.pincode_validator import PinCodeValidator, extract_address_parts

logger = get_logger(__name__)

MISSING_INPUT_MESSAGE = "Please provide either an address OR both pin code and city"
ADDRESS_NOT_FOUND_MESSAGE = "Could not find the specified address"
COORDINATES_NOT_FOUND_MESSAGE = "Could not find location coordinates"


class FailureReason(str, Enum):
    """소프트 실패 유형."""

    INPUT = "input"
    NOT_FOUND = "not_found"
    MISMATCH = "mismatch"


@dataclass(frozen=True, slots=True)
class ResolvedLocation:
    """요청 하나에서 확정된 기준 위치."""

    coordinate: Coordinate
    formatted_address: str
    city: str = ""
    state: str = ""
    country: str = ""

    @classmethod
    def from_geocode_result(cls, result: GeocodeResult) -> ResolvedLocation:
        parts = extract_address_parts(result.address_components)
        return cls(
            coordinate=result.location.to_coordinate(),
            formatted_address=result.formatted_address,
            city=parts.city,
            state=parts.state,
            country=parts.country,
        )


@dataclass(frozen=True, slots=True)
class LocationResolution:
    """위치 확정 결과. `location`이 없으면 `failure`와 `message`가 채워집니다."""

    location: ResolvedLocation | None = None
    failure: FailureReason | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.location is not None

    @classmethod
    def resolved(cls, location: ResolvedLocation) -> LocationResolution:
        return cls(location=location)

    @classmethod
    def failed(cls, reason: FailureReason, message: str) -> LocationResolution:
        return cls(failure=reason, message=message)


class LocationResolver:
    """주소 모드와 PIN 코드 모드를 조율합니다. 둘 다 주어지면 주소 모드가 우선합니다."""

    def __init__(self, maps_service: MapsServiceProtocol, validator: PinCodeValidator) -> None:
        self._maps_service = maps_service
        self._validator = validator

    async def resolve(self, pin_code: str = "", city: str = "", address: str = "") -> LocationResolution:
        """입력을 기준 위치로 확정합니다.

        결과 없음/입력 누락/도시 불일치는 소프트 실패로 반환하고,
        지오코딩 서비스 호출 실패는 `ExternalServiceError`로 전파합니다.
        """
        address = (address or "").strip()
        pin_code = (pin_code or "").strip()
        city = (city or "").strip()

        if address:
            return await self._resolve_address(address)
        if pin_code and city:
            return await self._resolve_pin_code(pin_code, city)
        return LocationResolution.failed(FailureReason.INPUT, MISSING_INPUT_MESSAGE)

    async def _resolve_address(self, address: str) -> LocationResolution:
        results = await self._maps_service.geocode(address)
        if not results:
            logger.info("Address lookup returned no results: address=%s", address)
            return LocationResolution.failed(FailureReason.NOT_FOUND, ADDRESS_NOT_FOUND_MESSAGE)
        return LocationResolution.resolved(ResolvedLocation.from_geocode_result(results[0]))

    async def _resolve_pin_code(self, pin_code: str, city: str) -> LocationResolution:
        validation = await self._validator.validate(pin_code, city)
        if not validation.valid:
            reason = FailureReason.MISMATCH if validation.details is not None else FailureReason.NOT_FOUND
            return LocationResolution.failed(reason, validation.message)

        results = await self._maps_service.geocode(f"{pin_code}, {city}")
        if not results:
            logger.info("PIN code + city lookup returned no results: pin_code=%s city=%s", pin_code, city)
            return LocationResolution.failed(FailureReason.NOT_FOUND, COORDINATES_NOT_FOUND_MESSAGE)
        return LocationResolution.resolved(ResolvedLocation.from_geocode_result(results[0]))
