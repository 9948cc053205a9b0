"""Uvicorn 로그 포맷을 공유하는 애플리케이션 로깅 설정."""

from __future__ import annotations

import copy
import logging.config
import os
from typing import Any

from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG

from app.core.logger import APP_LOGGER_NAME

_APP_LOG_FORMAT = "%(asctime)s %(levelprefix)s [%(name)s] %(message)s"
_APP_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
# requests 내부 연결 로그는 외부 호출마다 찍히므로 한 단계 올린다
_QUIET_LOGGERS = ("urllib3",)


def _resolve_log_level(level: str | None = None) -> str:
    return (level or os.getenv("LOG_LEVEL") or "INFO").upper()


def build_logging_config(level: str | None = None, *, stream: str = "ext://sys.stdout") -> dict[str, Any]:
    """uvicorn 기본 설정에 `app` 로거용 포맷터와 핸들러를 더한 dictConfig를 만듭니다.

    uvicorn 서버 로그와 애플리케이션 로그가 같은 레벨 접두어 형식으로 stdout/stderr에 기록됩니다.
    """
    log_level = _resolve_log_level(level)
    config = copy.deepcopy(UVICORN_LOGGING_CONFIG)
    config["disable_existing_loggers"] = False

    config["formatters"][APP_LOGGER_NAME] = {
        "()": "uvicorn.logging.DefaultFormatter",
        "fmt": _APP_LOG_FORMAT,
        "datefmt": _APP_DATE_FORMAT,
        "use_colors": None,
    }
    config["handlers"][APP_LOGGER_NAME] = {
        "formatter": APP_LOGGER_NAME,
        "class": "logging.StreamHandler",
        "stream": stream,
    }
    config["loggers"][APP_LOGGER_NAME] = {
        "handlers": [APP_LOGGER_NAME],
        "level": log_level,
        "propagate": False,
    }
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        config["loggers"][name]["level"] = log_level
    for name in _QUIET_LOGGERS:
        config["loggers"][name] = {"level": "WARNING"}

    return config


def configure_logging(level: str | None = None, *, stream: str = "ext://sys.stdout") -> None:
    """프로세스 로깅을 구성합니다. 서버와 스크립트 진입점에서 한 번 호출합니다."""
    logging.config.dictConfig(build_logging_config(level, stream=stream))
