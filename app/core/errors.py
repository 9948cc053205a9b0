"""위치 서비스 예외 계층.

입력 누락, 결과 없음, 도시 불일치 같은 소프트 실패는 예외가 아니라
`valid`/`success` 플래그가 false인 응답으로 표현합니다.
여기 정의된 예외는 HTTP 계층까지 전파되는 하드 오류만 다룹니다.
"""


class LocationServiceError(RuntimeError):
    """위치 서비스 예외의 기본 클래스."""


class ExternalServiceError(LocationServiceError):
    """지오코딩/장소 검색 외부 서비스 호출 실패."""

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation


class ExternalServiceTimeoutError(ExternalServiceError):
    """외부 서비스 호출이 제한 시간을 초과한 경우."""
