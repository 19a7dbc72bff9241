from __future__ import annotations

import argparse
import logging

from .limits import DescriptorLimitError, admission_width, descriptor_limit
from .models import ScanRequest
from .output import print_report
from .prober import DEFAULT_RETRY_POLICY, RetryPolicy
from .scanner import scan
from .services import DEFAULT_CATALOG_PATH, load_catalog
from .targets import DEFAULT_HOST, DEFAULT_IP, resolve_target

DEFAULT_PORT_LIMIT = 1024
DEFAULT_TIMEOUT = 0.5
DEFAULT_RANGE = 24


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="TCP connect scan of ports 1..N on a single host")
    p.add_argument("-p", "--ports", type=int, default=DEFAULT_PORT_LIMIT,
                   help=f"Upper bound of the scan (default: {DEFAULT_PORT_LIMIT})")
    p.add_argument("--ip", default=DEFAULT_IP, help=f"IP address to scan (default: {DEFAULT_IP})")
    p.add_argument("--host", default=DEFAULT_HOST,
                   help=f"Hostname to scan; used instead of --ip when not {DEFAULT_HOST}")
    p.add_argument("--range", type=int, default=DEFAULT_RANGE, dest="ip_range",
                   help="IP range prefix length (accepted, not used yet)")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                   help=f"Connect timeout seconds (default: {DEFAULT_TIMEOUT})")
    p.add_argument("--catalog", default=str(DEFAULT_CATALOG_PATH), help="Service catalog JSON file")
    p.add_argument("--max-inflight", type=int, default=None,
                   help="Cap on simultaneous probes (default: open-file limit)")
    p.add_argument("--max-retries", type=int, default=DEFAULT_RETRY_POLICY.max_retries,
                   help="Retries per port on 'too many open files'; -1 retries forever")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def retry_policy(max_retries: int) -> RetryPolicy:
    if max_retries < 0:
        return RetryPolicy(max_retries=None)
    return RetryPolicy(max_retries=max_retries)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    # Must be known before any socket is opened
    try:
        width = admission_width(descriptor_limit(), args.max_inflight)
    except DescriptorLimitError as e:
        raise SystemExit(f"Cannot determine open-file limit: {e}")
    except ValueError as e:
        raise SystemExit(str(e))

    catalog = load_catalog(args.catalog)

    if args.ip_range:
        logging.debug("--range %d given; range scanning is not implemented, ignoring", args.ip_range)

    try:
        target = resolve_target(args.ip, args.host)
        request = ScanRequest(port_limit=args.ports, timeout=args.timeout, width=width)
    except ValueError as e:
        raise SystemExit(str(e))

    report = scan(target, request, catalog, policy=retry_policy(args.max_retries))
    print_report(report)
    return 0
