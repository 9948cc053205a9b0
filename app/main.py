"""FastAPI 애플리케이션 진입점."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from app.api import endpoints
from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.logging_config import build_logging_config, configure_logging
from app.core.readiness import collect_readiness_status

configure_logging()
logger = get_logger(__name__)
settings = get_settings()


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _resolve_docs_mode(mode: str) -> str:
    normalized = (mode or "").strip().lower()
    if normalized in {"disabled", "public"}:
        return normalized
    logger.warning("Invalid DOCS_MODE value, falling back to disabled: %s", mode)
    return "disabled"


def _configure_cors(app_: FastAPI) -> None:
    origins = _split_csv(settings.CORS_ALLOW_ORIGINS)
    if not origins:
        return

    allow_methods = _split_csv(settings.CORS_ALLOW_METHODS) or ["GET", "POST", "OPTIONS"]
    allow_headers = _split_csv(settings.CORS_ALLOW_HEADERS) or ["Content-Type"]
    allow_credentials = settings.CORS_ALLOW_CREDENTIALS

    if "*" in origins and allow_credentials:
        logger.warning(
            "CORS_ALLOW_ORIGINS contains '*' together with CORS_ALLOW_CREDENTIALS=true; "
            "forcing allow_credentials to false."
        )
        allow_credentials = False

    app_.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=allow_methods,
        allow_headers=allow_headers,
    )


def _mount_static_frontend(app_: FastAPI) -> None:
    """정적 프론트엔드 디렉터리가 있으면 `/`에 마운트합니다. API 라우트가 우선합니다."""
    static_dir = Path(settings.STATIC_DIR)
    if not static_dir.is_dir():
        logger.info("Static frontend directory not found, skipping mount: %s", static_dir)
        return
    app_.mount("/", StaticFiles(directory=static_dir, html=True), name="static")


@asynccontextmanager
async def lifespan(app_: FastAPI):
    """애플리케이션 시작 시 노출 엔드포인트를 기록합니다."""
    logger.info("Starting PIN code landmarks service (env=%s port=%s)", settings.APP_ENV, settings.PORT)
    logger.info("Endpoints:")
    logger.info("  POST /api/validate-pincode - Validate PIN code with city")
    logger.info("  POST /api/get-landmarks - Get nearby landmarks (supports address or pin+city)")
    logger.info("  GET  /health - Health check")
    logger.info("  GET  /ready - Readiness check")
    yield


docs_mode = _resolve_docs_mode(settings.DOCS_MODE)

app = FastAPI(
    title="PIN Code Landmarks API",
    lifespan=lifespan,
    docs_url="/docs" if docs_mode == "public" else None,
    redoc_url="/redoc" if docs_mode == "public" else None,
    openapi_url="/openapi.json" if docs_mode == "public" else None,
)

_configure_cors(app)

app.include_router(endpoints.router)


@app.middleware("http")
async def add_security_headers(request: Request, call_next) -> Response:
    """기본 보안 헤더를 응답에 추가합니다."""
    response = await call_next(request)
    if not settings.SECURITY_HEADERS_ENABLED:
        return response

    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    if request.url.path.startswith("/api/"):
        response.headers.setdefault("Cache-Control", "no-store")
    return response


@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """요청 라인을 기록합니다."""
    client = f"{request.client.host}:{request.client.port}" if request.client else "-"
    logger.info("[%s] %s %s", request.method, request.url.path, client)
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """해석할 수 없는 요청 본문을 400으로 응답합니다."""
    logger.warning("Invalid request body on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상하지 못한 예외를 표준 형식으로 처리합니다."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    message = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else "Internal server error"
    return JSONResponse(status_code=500, content={"detail": message})


@app.get("/health")
def health_check() -> dict:
    """헬스 체크 엔드포인트."""
    return {"status": "healthy"}


@app.get("/ready")
async def readiness_check() -> JSONResponse:
    """외부 의존성 준비 상태를 반환합니다."""
    result = await collect_readiness_status()
    status_code = status.HTTP_200_OK if result["status"] == "ready" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=result)


_mount_static_frontend(app)


def run() -> None:
    """`PORT` 설정으로 uvicorn 서버를 실행합니다."""
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, log_config=build_logging_config())


if __name__ == "__main__":
    run()
