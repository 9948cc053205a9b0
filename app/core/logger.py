"""모듈별 로거 헬퍼.

핸들러와 포맷은 `configure_logging`이 `app` 로거에 한 번만 설정하고,
각 모듈은 이름만 받아 그 설정을 상속합니다.
"""

import logging

APP_LOGGER_NAME = "app"


def get_logger(name: str) -> logging.Logger:
    """`app` 네임스페이스 아래의 로거를 반환합니다.

    `__main__`처럼 패키지 밖에서 실행된 모듈도 같은 핸들러를 쓰도록 접두어를 붙입니다.

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용).
    """
    if name == APP_LOGGER_NAME or name.startswith(f"{APP_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
