"""대권 거리 계산을 위한 지리 유틸리티."""

from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_METERS = 6_371_000.0


def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """두 위경도 좌표 사이의 대권 거리(m)를 반환합니다.

    atan2 형태의 Haversine 공식을 사용하므로 같은 점이나 대척점 부근에서도 안정적입니다.
    같은 좌표이면 정확히 0을 반환합니다.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(d_lon / 2) ** 2
    # 부동소수 오차로 1을 살짝 넘는 경우 sqrt(1 - a)가 실패하지 않도록 보정
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


@dataclass(frozen=True, slots=True)
class Coordinate:
    """지오코딩 결과로 확정된 위경도 좌표."""

    lat: float
    lng: float

    def distance_to(self, other: Coordinate) -> float:
        """다른 좌표까지의 거리(m)."""
        return haversine_distance_m(self.lat, self.lng, other.lat, other.lng)

    def to_query_param(self) -> str:
        """Google Maps `location` 쿼리 파라미터 형식(`lat,lng`)으로 직렬화합니다."""
        return f"{self.lat},{self.lng}"
