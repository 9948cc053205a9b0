"""Google Maps 응답을 표준화한 지오코딩/장소 모델."""

from pydantic import BaseModel, Field

from app.core.geo import Coordinate


class PlaceGeometry(BaseModel):
    """장소 위치 좌표."""

    lat: float = Field(..., description="위도")
    lng: float = Field(..., description="경도")

    def to_coordinate(self) -> Coordinate:
        """불변 `Coordinate` 값으로 변환합니다."""
        return Coordinate(lat=self.lat, lng=self.lng)


class AddressComponent(BaseModel):
    """주소를 구성하는 태그가 붙은 조각."""

    long_name: str = Field(..., description="전체 이름")
    short_name: str | None = Field(default=None, description="약칭")
    types: list[str] = Field(default_factory=list, description="주소 구성요소 유형 목록")


class GeocodeResult(BaseModel):
    """지오코딩 결과 한 건."""

    formatted_address: str = Field(default="", description="정형화된 주소")
    address_components: list[AddressComponent] = Field(default_factory=list, description="주소 구성요소")
    location: PlaceGeometry = Field(..., description="결과 좌표")


class PlaceCandidate(BaseModel):
    """주변 장소 검색에서 반환된 후보 장소."""

    place_id: str = Field(..., description="Google Places 고유 ID")
    name: str = Field(..., description="장소 이름")
    vicinity: str = Field(default="", description="장소 주변 주소")
    types: list[str] = Field(default_factory=list, description="장소 유형 목록")
    rating: float | None = Field(default=None, ge=0, le=5, description="평점 (0~5)")
    user_ratings_total: int = Field(default=0, ge=0, description="리뷰 수")
    location: PlaceGeometry = Field(..., description="장소 좌표")
