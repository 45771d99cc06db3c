# This file runs a very quick performance check against a running exchange.
# It repeatedly reads the admin status resource and prints the average time per call.
# ruff: noqa: E402

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from exchangeapi.common.logging import LOG_FORMAT
from exchangeapi.perfutils import (
    ExchangeClient,
    ExchangeRequestError,
    exchange_url,
    is_verbose,
    run_smalltest,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Time repeated GETs of the admin status resource")
    parser.add_argument("num_times", help="number of GET requests to send")
    parser.add_argument("--url", default=None, help="exchange base URL (default: $HZN_EXCHANGE_URL)")
    parser.add_argument("--verbose", action="store_true", help="print each HTTP status code")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        num_times = int(args.num_times)
    except ValueError:
        print("first arg num-times must be an integer number", file=sys.stderr)
        return 2

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    client = ExchangeClient(base_url=args.url or exchange_url())
    try:
        run_smalltest(client, num_times=num_times, verbose=args.verbose or is_verbose())
    except ExchangeRequestError as exc:
        print(f"smalltest failed: {exc}", file=sys.stderr)
        return 3
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
