"""Google Maps로 PIN 코드 검증 또는 주변 랜드마크 조회를 직접 실행합니다.

사용법:
  python scripts/lookup_landmarks.py validate --pin-code 208001 --city Kanpur
  python scripts/lookup_landmarks.py landmarks --address "Mall Road, Kanpur" --radius 1500
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app.core.errors import ExternalServiceError  # noqa: E402
from app.core.logging_config import configure_logging  # noqa: E402
from app.services.google_maps_service import GoogleMapsService  # noqa: E402
from app.services.location_service import LocationService  # noqa: E402


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run PIN code validation or landmark lookup against Google Maps.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Check whether a PIN code belongs to a city.")
    validate.add_argument("--pin-code", required=True, help="6-digit Indian PIN code.")
    validate.add_argument("--city", required=True, help="Claimed city name.")

    landmarks = subparsers.add_parser("landmarks", help="List popular landmarks near a location.")
    landmarks.add_argument("--pin-code", default="", help="6-digit Indian PIN code.")
    landmarks.add_argument("--city", default="", help="City name (used with --pin-code).")
    landmarks.add_argument("--address", default="", help="Free-form street address. Takes precedence.")
    landmarks.add_argument("--radius", type=float, default=0.0, help="Search radius in meters (0 = 1000).")
    return parser


async def _run(args: argparse.Namespace) -> dict:
    with GoogleMapsService.from_settings() as maps_service:
        service = LocationService.from_settings(maps_service)
        if args.command == "validate":
            response = await service.validate_pin_code(args.pin_code, args.city)
            return response.model_dump(exclude_none=True)

        response = await service.get_landmarks(
            pin_code=args.pin_code,
            city=args.city,
            address=args.address,
            radius=args.radius,
        )
        return response.model_dump()


def main() -> int:
    args = _build_parser().parse_args()
    # stdout은 JSON 결과 전용
    configure_logging(stream="ext://sys.stderr")

    try:
        result = asyncio.run(_run(args))
    except ExternalServiceError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
