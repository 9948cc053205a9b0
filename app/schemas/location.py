"""PIN 코드 검증 및 주변 랜드마크 API 스키마."""

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    """응답용 위경도 좌표."""

    lat: float = Field(0.0, description="위도")
    lng: float = Field(0.0, description="경도")


class ValidatePinCodeRequest(BaseModel):
    """PIN 코드-도시 검증 요청 본문.

    누락된 필드는 빈 문자열로 처리되어 소프트 실패 응답으로 이어집니다.
    """

    pin_code: str = Field(default="", description="6자리 인도 PIN 코드")
    city: str = Field(default="", description="사용자가 주장하는 도시 이름")


class ValidationDetails(BaseModel):
    """지오코딩 결과에서 추출한 위치 상세."""

    pin_code: str = Field(..., description="요청한 PIN 코드")
    city: str = Field(default="", description="지오코딩된 도시 (소문자)")
    state: str = Field(default="", description="주(state)")
    country: str = Field(default="", description="국가")
    formatted_address: str = Field(default="", description="정형화된 주소")


class ValidationResponse(BaseModel):
    """PIN 코드-도시 검증 결과."""

    valid: bool = Field(..., description="PIN 코드가 도시에 속하는지 여부")
    message: str = Field(..., description="사람이 읽을 수 있는 결과 메시지")
    suggestions: list[str] | None = Field(default=None, description="추천 도시 목록")
    details: ValidationDetails | None = Field(default=None, description="위치 상세")


class GetLandmarksRequest(BaseModel):
    """주변 랜드마크 조회 요청 본문.

    `address`가 있으면 주소 모드, 없으면 `pin_code` + `city` 모드로 동작합니다.
    """

    pin_code: str = Field(default="", description="6자리 인도 PIN 코드")
    city: str = Field(default="", description="도시 이름")
    address: str = Field(default="", description="자유 형식 도로명 주소")
    radius: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="검색 반경(m), 0이면 1000m")


class Landmark(BaseModel):
    """점수가 매겨진 주변 랜드마크."""

    name: str = Field(..., description="장소 이름")
    address: str = Field(default="", description="장소 주변 주소")
    distance: float = Field(..., ge=0, description="기준 위치로부터의 거리(m)")
    place_id: str = Field(..., description="Google Places 고유 ID")
    types: list[str] = Field(default_factory=list, description="장소 유형 목록")
    location: LatLng = Field(..., description="장소 좌표")
    rating: float = Field(default=0.0, description="평점")
    user_ratings_total: int = Field(default=0, description="리뷰 수")
    popularity_score: float = Field(..., description="인기도 점수")


class LandmarksResponse(BaseModel):
    """주변 랜드마크 조회 결과."""

    success: bool = Field(..., description="조회 성공 여부")
    message: str = Field(..., description="사람이 읽을 수 있는 결과 메시지")
    landmarks: list[Landmark] = Field(default_factory=list, description="인기도 순 랜드마크 목록")
    location: LatLng = Field(default_factory=LatLng, description="기준 위치 좌표")
