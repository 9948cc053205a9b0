"""PIN 코드가 주장된 도시에 속하는지 검증하는 서비스."""

from __future__ import annotations

from dataclasses import dataclass

from app.core.logger import get_logger
from app.schemas.location import ValidationDetails, ValidationResponse
from app.schemas.place import AddressComponent, GeocodeResult
from app.services.maps_service import MapsServiceProtocol

logger = get_logger(__name__)

_CITY_TYPES = frozenset({"locality", "administrative_area_level_2"})
_STATE_TYPE = "administrative_area_level_1"
_COUNTRY_TYPE = "country"


@dataclass(frozen=True, slots=True)
class AddressParts:
    """지오코딩 결과 한 건에서 추출한 도시/주/국가."""

    city: str = ""
    state: str = ""
    country: str = ""


def extract_address_parts(components: list[AddressComponent]) -> AddressParts:
    """주소 구성요소에서 도시/주/국가를 추출합니다.

    유형별로 처음 발견된 구성요소만 사용하며, 도시는 소문자로 정규화합니다.
    """
    city = state = country = ""
    for component in components:
        for component_type in component.types:
            if component_type in _CITY_TYPES:
                if not city:
                    city = component.long_name.strip().lower()
            elif component_type == _STATE_TYPE:
                if not state:
                    state = component.long_name.strip()
            elif component_type == _COUNTRY_TYPE:
                if not country:
                    country = component.long_name.strip()
    return AddressParts(city=city, state=state, country=country)


def cities_match(claimed_city: str, geocoded_city: str) -> bool:
    """두 도시 이름이 서로의 부분 문자열이면 일치로 판단합니다 ("kanpur" vs "kanpur nagar").

    어느 한쪽이라도 비어 있으면 일치하지 않습니다.
    """
    claimed = claimed_city.strip().lower()
    geocoded = geocoded_city.strip().lower()
    # 빈 문자열은 모든 이름의 부분 문자열이므로 도시가 없는 결과는 불일치로 본다
    if not claimed or not geocoded:
        return False
    return claimed in geocoded or geocoded in claimed


def _build_details(pin_code: str, parts: AddressParts, result: GeocodeResult) -> ValidationDetails:
    return ValidationDetails(
        pin_code=pin_code,
        city=parts.city,
        state=parts.state,
        country=parts.country,
        formatted_address=result.formatted_address,
    )


class PinCodeValidator:
    """지오코딩 결과를 바탕으로 PIN 코드-도시 일치 여부를 판단합니다."""

    def __init__(self, maps_service: MapsServiceProtocol, country_restriction: str = "") -> None:
        self._maps_service = maps_service
        self._country_restriction = country_restriction

    def _components(self, pin_code: str) -> dict[str, str]:
        components = {"postal_code": pin_code}
        if self._country_restriction:
            components["country"] = self._country_restriction
        return components

    async def validate(self, pin_code: str, city: str) -> ValidationResponse:
        """PIN 코드를 지오코딩하여 주장된 도시와 비교합니다.

        지오코딩 서비스 호출 실패는 `ExternalServiceError`로 그대로 전파됩니다.
        """
        pin_code = (pin_code or "").strip()
        claimed_city = (city or "").strip().lower()

        if not pin_code or not claimed_city:
            return ValidationResponse(valid=False, message="PIN code and city are required")

        results = await self._maps_service.geocode(pin_code, components=self._components(pin_code))
        if not results:
            logger.info("PIN code lookup returned no results: pin_code=%s", pin_code)
            return ValidationResponse(
                valid=False,
                message=f"Invalid PIN code: no location found for postal code {pin_code}",
            )

        last_city = ""
        last_details: ValidationDetails | None = None
        for result in results:
            parts = extract_address_parts(result.address_components)
            details = _build_details(pin_code, parts, result)
            if cities_match(claimed_city, parts.city):
                logger.info("PIN code matched city: pin_code=%s city=%s", pin_code, parts.city)
                return ValidationResponse(
                    valid=True,
                    message="PIN code and city match successfully",
                    details=details,
                )
            if parts.city:
                last_city = parts.city
            last_details = details

        suggestions = [last_city] if last_city else []
        logger.info(
            "PIN code did not match city: pin_code=%s claimed=%s suggestions=%s",
            pin_code,
            claimed_city,
            suggestions,
        )
        return ValidationResponse(
            valid=False,
            message=f"PIN code {pin_code} does not belong to {claimed_city}",
            suggestions=suggestions,
            details=last_details,
        )
