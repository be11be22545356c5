"""Print a quote preview for a JSON request read from a file or stdin."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from studio_pricing.core.config import get_settings
from studio_pricing.core.errors import PricingError
from studio_pricing.core.logging import configure_logging
from studio_pricing.services import quote_service

LOGGER = logging.getLogger("quote_preview")


def _load_payload(source: str) -> dict:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def run(source: str, *, indent: int | None = 2) -> int:
    settings = get_settings()
    configure_logging(settings)
    try:
        payload = _load_payload(source)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Could not read quote request: {exc}", file=sys.stderr)
        return 2
    try:
        quote = quote_service.quote_from_payload(payload, settings=settings)
    except PricingError as exc:
        LOGGER.debug("Quote rejected with %s", exc.code.value)
        print(f"{exc.code.value}: {exc.message}", file=sys.stderr)
        return 1
    print(json.dumps(quote.to_payload(), indent=indent, ensure_ascii=False))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Preview a studio reservation quote")
    parser.add_argument(
        "request",
        nargs="?",
        default="-",
        help="Path to a JSON quote request, or - for stdin",
    )
    parser.add_argument("--compact", action="store_true", help="Print JSON on one line")
    args = parser.parse_args()
    sys.exit(run(args.request, indent=None if args.compact else 2))


if __name__ == "__main__":
    main()
