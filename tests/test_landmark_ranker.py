"""랜드마크 점수화/정렬 로직 테스트."""

from __future__ import annotations

import pytest

from app.core.geo import Coordinate
from app.services.landmark_ranker import (
    DEFAULT_RADIUS_METERS,
    MAX_LANDMARKS,
    rank_landmarks,
    resolve_radius,
    score_candidate,
)
from tests.mocks.fake_maps_service import KANPUR_CENTER, make_place

ORIGIN = Coordinate(lat=KANPUR_CENTER[0], lng=KANPUR_CENTER[1])


def _offset(meters_north: float) -> tuple[float, float]:
    return KANPUR_CENTER[0] + meters_north / 111_195, KANPUR_CENTER[1]


@pytest.mark.parametrize(("radius", "expected"), [(None, DEFAULT_RADIUS_METERS), (0, 1000.0), (500, 500), (2500.5, 2500.5)])
def test_resolve_radius(radius, expected) -> None:
    assert resolve_radius(radius) == expected


def test_score_candidate_excludes_query_point() -> None:
    lat, lng = _offset(5)

    assert score_candidate(ORIGIN, make_place("p1", "Same Spot", lat, lng)) is None


def test_score_candidate_excludes_zero_reviews() -> None:
    lat, lng = _offset(300)

    assert score_candidate(ORIGIN, make_place("p1", "New Cafe", lat, lng, rating=5.0, user_ratings_total=0)) is None


def test_score_candidate_populates_landmark() -> None:
    lat, lng = _offset(500)
    landmark = score_candidate(
        ORIGIN,
        make_place("p1", "Moti Jheel", lat, lng, rating=4.4, user_ratings_total=999, types=["park"]),
    )

    assert landmark is not None
    assert landmark.name == "Moti Jheel"
    assert landmark.address == "Moti Jheel, Kanpur"
    assert landmark.place_id == "p1"
    assert landmark.types == ["park"]
    assert landmark.distance == pytest.approx(500, rel=1e-3)
    assert landmark.rating == 4.4
    assert landmark.user_ratings_total == 999
    assert landmark.popularity_score == pytest.approx(4.4 * 3 / (1 + landmark.distance / 1000))
    assert landmark.location.lat == lat


def test_score_candidate_missing_rating_scores_zero() -> None:
    lat, lng = _offset(200)
    landmark = score_candidate(ORIGIN, make_place("p1", "Unrated", lat, lng, rating=None, user_ratings_total=10))

    assert landmark is not None
    assert landmark.rating == 0.0
    assert landmark.popularity_score == 0.0


def test_rank_excludes_and_orders_by_score() -> None:
    candidates = [
        make_place("a", "Green Park", *_offset(200), rating=4.5, user_ratings_total=5000),
        make_place("b", "Phool Bagh", *_offset(800), rating=4.2, user_ratings_total=3000),
        make_place("c", "JK Temple", *_offset(1500), rating=4.7, user_ratings_total=40000),
        make_place("d", "Allen Forest Zoo", *_offset(400), rating=4.1, user_ratings_total=100),
        make_place("e", "Z Square Mall", *_offset(100), rating=4.3, user_ratings_total=20000),
        make_place("f", "Closed Shop", *_offset(300), rating=5.0, user_ratings_total=0),
        make_place("g", "New Kiosk", *_offset(50), rating=4.9, user_ratings_total=0),
        make_place("h", "Query Point", *_offset(3), rating=4.8, user_ratings_total=90000),
    ]

    landmarks = rank_landmarks(ORIGIN, candidates)
    place_ids = [landmark.place_id for landmark in landmarks]
    scores = [landmark.popularity_score for landmark in landmarks]

    assert len(landmarks) == 5
    assert not {"f", "g", "h"} & set(place_ids)
    assert scores == sorted(scores, reverse=True)
    assert place_ids[0] == "e"


def test_rank_returns_at_most_five() -> None:
    candidates = [make_place(f"p{i}", f"Place {i}", *_offset(100 + i * 50)) for i in range(12)]

    landmarks = rank_landmarks(ORIGIN, candidates)

    assert len(landmarks) == MAX_LANDMARKS
    assert [landmark.place_id for landmark in landmarks] == ["p0", "p1", "p2", "p3", "p4"]


def test_rank_breaks_ties_by_place_id() -> None:
    lat, lng = _offset(250)
    candidates = [
        make_place("zeta", "Same Score", lat, lng),
        make_place("alpha", "Same Score", lat, lng),
        make_place("mid", "Same Score", lat, lng),
    ]

    landmarks = rank_landmarks(ORIGIN, candidates)

    assert [landmark.place_id for landmark in landmarks] == ["alpha", "mid", "zeta"]


def test_rank_empty_when_everything_excluded() -> None:
    candidates = [
        make_place("a", "No Reviews", *_offset(300), user_ratings_total=0),
        make_place("b", "Right Here", *_offset(1)),
    ]

    assert rank_landmarks(ORIGIN, candidates) == []
    assert rank_landmarks(ORIGIN, []) == []
