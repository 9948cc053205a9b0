"""지오코딩/주변 장소 검색 서비스 추상 프로토콜 정의."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import TypeVar

from app.core.errors import ExternalServiceTimeoutError
from app.core.geo import Coordinate
from app.core.logger import get_logger
from app.schemas.place import GeocodeResult, PlaceCandidate

logger = get_logger(__name__)

T = TypeVar("T")


class MapsServiceProtocol(ABC):
    """지도 제공자 호출을 위한 인터페이스를 정의합니다.

    구현체는 상태를 갖지 않아야 하며 여러 요청에서 동시에 호출될 수 있어야 합니다.
    결과가 없으면 빈 목록을, 호출 자체가 실패하면 `ExternalServiceError`를 발생시킵니다.
    """

    @abstractmethod
    async def geocode(self, query: str, components: dict[str, str] | None = None) -> list[GeocodeResult]:
        """주소/PIN 코드 문자열을 지오코딩합니다.

        Args:
            query: 검색어 (주소 또는 PIN 코드)
            components: 구성요소 제한 (예: {"postal_code": "208001"})

        Returns:
            지오코딩 결과 목록
        """
        raise NotImplementedError

    @abstractmethod
    async def nearby_search(self, center: Coordinate, radius_m: float, place_type: str) -> list[PlaceCandidate]:
        """중심 좌표 주변의 장소를 검색합니다.

        Args:
            center: 검색 중심 좌표
            radius_m: 검색 반경(m)
            place_type: 장소 유형 (예: "point_of_interest")

        Returns:
            후보 장소 목록
        """
        raise NotImplementedError


class TimeoutBoundMapsService(MapsServiceProtocol):
    """모든 호출에 제한 시간을 적용하는 래퍼.

    제한 시간을 넘기면 진행 중인 호출을 취소하고 `ExternalServiceTimeoutError`를 발생시킵니다.
    """

    def __init__(self, inner: MapsServiceProtocol, timeout_seconds: float) -> None:
        self._inner = inner
        self._timeout_seconds = timeout_seconds

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    async def geocode(self, query: str, components: dict[str, str] | None = None) -> list[GeocodeResult]:
        return await self._bounded(self._inner.geocode(query, components), operation="geocode")

    async def nearby_search(self, center: Coordinate, radius_m: float, place_type: str) -> list[PlaceCandidate]:
        return await self._bounded(
            self._inner.nearby_search(center, radius_m, place_type),
            operation="nearby_search",
        )

    async def _bounded(self, call: Awaitable[T], *, operation: str) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except asyncio.TimeoutError as exc:
            logger.warning("Maps call timed out: operation=%s timeout=%ss", operation, self._timeout_seconds)
            raise ExternalServiceTimeoutError(
                f"{operation} timed out after {self._timeout_seconds}s",
                operation=operation,
            ) from exc
