from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from splunk_query.client import SplunkClient
from splunk_query.config import config_from_env, credentials_from_env
from splunk_query.errors import SplunkError
from splunk_query.jobs import PollMode, PollPolicy

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


def _poll_policy(args: argparse.Namespace) -> PollPolicy:
    return PollPolicy(
        interval_sec=args.interval,
        max_attempts=args.max_attempts,
        timeout_sec=args.timeout,
        mode=PollMode.STATUS if args.status_mode else PollMode.CONTENT,
    )


def _client(args: argparse.Namespace) -> SplunkClient:
    policy = _poll_policy(args) if args.command == "search" else None
    return SplunkClient(config_from_env(), credentials_from_env(), poll_policy=policy)


def search(args: argparse.Namespace) -> int:
    with _client(args) as client:
        results = client.query(args.query)
    if results is None:
        logger.info("no results", extra={"query": args.query})
        return 1
    print(json.dumps(results, indent=args.indent))
    return 0


def login(args: argparse.Namespace) -> int:
    with _client(args) as client:
        session = client.login()
    if session is None:
        logger.error("login failed: no session key returned")
        return 1
    logger.info("login succeeded")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run Splunk searches from the command line")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    search_cmd = sub.add_parser("search", help="Run a search job and print its results as JSON")
    search_cmd.add_argument("query")
    search_cmd.add_argument("--interval", type=float, default=0.0, help="Seconds between poll requests")
    search_cmd.add_argument("--max-attempts", type=int, default=None)
    search_cmd.add_argument("--timeout", type=float, default=None, help="Give up polling after this many seconds")
    search_cmd.add_argument("--status-mode", action="store_true", help="Poll the job dispatch state instead of the results body")
    search_cmd.add_argument("--indent", type=int, default=2)
    search_cmd.set_defaults(func=search)

    login_cmd = sub.add_parser("login", help="Check that the configured credentials yield a session")
    login_cmd.set_defaults(func=login)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    try:
        return args.func(args)
    except SplunkError as exc:
        logger.error("splunk request failed: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
