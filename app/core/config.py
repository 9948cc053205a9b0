"""애플리케이션 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    GOOGLE_MAPS_API_KEY: str
    GOOGLE_MAPS_LANGUAGE_CODE: str = "en"
    GOOGLE_MAPS_REGION_CODE: str = "in"
    GOOGLE_MAPS_COUNTRY_RESTRICTION: str = ""
    REQUEST_TIMEOUT_SECONDS: int = 30
    EXTERNAL_API_TIMEOUT_SECONDS: int = 10
    GOOGLE_MAPS_TIMEOUT_SECONDS: int = 10
    LANDMARK_PLACE_TYPE: str = "point_of_interest"
    APP_ENV: str = "development"
    PORT: int = 8080
    STATIC_DIR: str = "static"
    DOCS_MODE: str = "disabled"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = "*"
    CORS_ALLOW_METHODS: str = "GET,POST,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type"
    CORS_ALLOW_CREDENTIALS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("GOOGLE_MAPS_COUNTRY_RESTRICTION", mode="before")
    @classmethod
    def _strip_country_restriction(cls, value: object) -> str:
        return str(value or "").strip().lower()

    @field_validator("LANDMARK_PLACE_TYPE", mode="before")
    @classmethod
    def _default_landmark_place_type(cls, value: object) -> str:
        return str(value or "").strip() or "point_of_interest"

    @field_validator("PORT", mode="before")
    @classmethod
    def _default_port(cls, value: object) -> int:
        try:
            numeric = int(value) if value not in (None, "") else 8080
        except (TypeError, ValueError):
            numeric = 8080
        return numeric if 0 < numeric < 65536 else 8080


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
