"""PIN 코드 검증 및 주변 랜드마크 API 엔드포인트 정의."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_location_service
from app.core.config import get_settings
from app.core.errors import ExternalServiceError, ExternalServiceTimeoutError
from app.core.logger import get_logger
from app.schemas.location import (
    GetLandmarksRequest,
    LandmarksResponse,
    ValidatePinCodeRequest,
    ValidationResponse,
)
from app.services.location_service import LocationService

router = APIRouter(prefix="/api", tags=["location"])
logger = get_logger(__name__)


def _to_http_exception(prefix: str, exc: ExternalServiceError) -> HTTPException:
    """외부 서비스 하드 오류를 HTTP 오류로 변환합니다."""
    status_code = (
        status.HTTP_504_GATEWAY_TIMEOUT
        if isinstance(exc, ExternalServiceTimeoutError)
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    reason = str(exc) if get_settings().EXPOSE_INTERNAL_ERRORS else "external location service unavailable"
    return HTTPException(status_code=status_code, detail=f"{prefix}: {reason}")


@router.post("/validate-pincode", response_model=ValidationResponse, response_model_exclude_none=True)
async def validate_pincode(
    request: ValidatePinCodeRequest,
    service: LocationService = Depends(get_location_service),  # noqa: B008
) -> ValidationResponse:
    """PIN 코드가 주어진 도시에 속하는지 검증합니다."""
    logger.info("Validate request received: pin_code=%s city=%s", request.pin_code, request.city)
    try:
        return await service.validate_pin_code(request.pin_code, request.city)
    except ExternalServiceError as exc:
        logger.error("Validation failed: %s", exc)
        raise _to_http_exception("Validation failed", exc) from exc


@router.post("/get-landmarks", response_model=LandmarksResponse)
async def get_landmarks(
    request: GetLandmarksRequest,
    service: LocationService = Depends(get_location_service),  # noqa: B008
) -> LandmarksResponse:
    """주소 또는 PIN 코드 + 도시 주변의 인기 랜드마크를 반환합니다."""
    logger.info(
        "Landmarks request received: pin_code=%s city=%s address=%s radius=%s",
        request.pin_code,
        request.city,
        request.address,
        request.radius,
    )
    try:
        response = await service.get_landmarks(
            pin_code=request.pin_code,
            city=request.city,
            address=request.address,
            radius=request.radius,
        )
    except ExternalServiceError as exc:
        logger.error("Landmark lookup failed: %s", exc)
        raise _to_http_exception("Failed to get landmarks", exc) from exc

    logger.info("Landmarks request completed: success=%s count=%d", response.success, len(response.landmarks))
    return response
