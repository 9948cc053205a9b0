"""주변 장소 후보를 인기도 점수로 정렬해 상위 랜드마크를 고르는 로직."""

from __future__ import annotations

from app.core.geo import Coordinate
from app.core.logger import get_logger
from app.core.scoring import popularity_score
from app.schemas.location import Landmark, LatLng
from app.schemas.place import PlaceCandidate

logger = get_logger(__name__)

DEFAULT_RADIUS_METERS = 1000.0
MAX_LANDMARKS = 5
MIN_DISTANCE_METERS = 10.0


def resolve_radius(radius_m: float | None) -> float:
    """반경이 0이거나 없으면 기본값(1000m)을, 아니면 그대로 반환합니다."""
    if not radius_m:
        return DEFAULT_RADIUS_METERS
    return radius_m


def score_candidate(origin: Coordinate, candidate: PlaceCandidate) -> Landmark | None:
    """후보 하나에 거리와 점수를 붙입니다. 제외 대상이면 None."""
    distance = origin.distance_to(candidate.location.to_coordinate())
    # 기준 위치 자체로 보이는 장소나 리뷰가 없는 장소는 점수를 매기지 않는다
    if distance < MIN_DISTANCE_METERS or candidate.user_ratings_total == 0:
        return None

    return Landmark(
        name=candidate.name,
        address=candidate.vicinity,
        distance=distance,
        place_id=candidate.place_id,
        types=list(candidate.types),
        location=LatLng(lat=candidate.location.lat, lng=candidate.location.lng),
        rating=candidate.rating or 0.0,
        user_ratings_total=candidate.user_ratings_total,
        popularity_score=popularity_score(candidate.rating, candidate.user_ratings_total, distance),
    )


def rank_landmarks(
    origin: Coordinate,
    candidates: list[PlaceCandidate],
    limit: int = MAX_LANDMARKS,
) -> list[Landmark]:
    """후보를 점수 내림차순으로 정렬해 최대 `limit`개를 반환합니다.

    동점이면 place_id, 이름 오름차순으로 정렬해 결과를 재현 가능하게 유지합니다.
    """
    scored = [landmark for landmark in (score_candidate(origin, candidate) for candidate in candidates) if landmark]
    scored.sort(key=lambda landmark: (-landmark.popularity_score, landmark.place_id, landmark.name))
    selected = scored[: max(0, limit)]

    logger.info(
        "Landmark ranking completed: candidates=%d excluded=%d returned=%d",
        len(candidates),
        len(candidates) - len(scored),
        len(selected),
    )
    return selected
