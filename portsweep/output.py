from __future__ import annotations

import logging
from typing import Iterable, List

from .models import PortOutcome, ScanReport, ScanState, Target

logger = logging.getLogger(__name__)


def aggregate(target: Target, outcomes: Iterable[PortOutcome], port_limit: int) -> ScanReport:
    """
    Folds the joined per-port outcomes into a completed report.
    Expects exactly one outcome for every port in 1..port_limit; open ports
    are listed in ascending order regardless of completion order.
    """
    seen = set()
    open_ports: List[PortOutcome] = []
    closed = 0
    for o in outcomes:
        if o.port in seen:
            raise ValueError(f"Duplicate outcome for port {o.port}")
        seen.add(o.port)
        if o.is_open:
            open_ports.append(o)
        else:
            closed += 1

    if len(seen) != port_limit:
        raise ValueError(f"Expected {port_limit} outcomes, got {len(seen)}")

    logger.debug("Aggregated %d open / %d closed", len(open_ports), closed)
    return ScanReport(
        target=target,
        port_limit=port_limit,
        state=ScanState.COMPLETED,
        open_ports=tuple(sorted(open_ports, key=lambda x: x.port)),
        closed_count=closed,
    )


def format_header(target: Target) -> str:
    return f"IP Address {target.address}, Hostname {target.name or target.address}"


def format_row(o: PortOutcome) -> str:
    return f"Port {o.port}: open | Service: {o.service or 'unknown'}"


def format_summary(report: ScanReport) -> str:
    return f"There are {report.open_count} ports open and {report.closed_count} ports closed."


def format_report(report: ScanReport) -> List[str]:
    lines = [format_header(report.target)]
    if report.host_down:
        lines.append("Host may be Down!")
        return lines
    lines.extend(format_row(o) for o in report.open_ports)
    lines.append(format_summary(report))
    return lines


def print_report(report: ScanReport) -> None:
    for line in format_report(report):
        print(line)
