"""랜드마크 인기도 점수 계산."""

from __future__ import annotations

import math

_DISTANCE_PENALTY_UNIT_METERS = 1000.0


def popularity_score(rating: float | None, review_count: int, distance_m: float) -> float:
    """평점, 리뷰 수, 거리로 인기도 점수를 계산합니다.

    `rating * log10(review_count + 1) / (1 + distance_m / 1000)`

    리뷰 수는 로그로 완만하게 반영하고, 거리는 차단 기준이 아닌 분모 패널티로 반영합니다.
    평점이 없으면 0으로 취급합니다.
    """
    review_score = float(rating or 0.0) * math.log10(max(0, int(review_count)) + 1)
    distance_penalty = 1.0 + max(0.0, float(distance_m)) / _DISTANCE_PENALTY_UNIT_METERS
    return review_score / distance_penalty
