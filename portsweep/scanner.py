from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, List, Sequence

from . import liveness
from .models import CatalogEntry, PortOutcome, PortStatus, ScanReport, ScanRequest, ScanState, Target
from .output import aggregate
from .prober import DEFAULT_RETRY_POLICY, RetryPolicy, probe_port
from .services import classify
from .targets import display_name

logger = logging.getLogger(__name__)

Prober = Callable[[Target, int, float, RetryPolicy], PortStatus]


def probe_one(
    target: Target,
    port: int,
    request: ScanRequest,
    catalog: Sequence[CatalogEntry],
    probe: Prober,
    policy: RetryPolicy,
) -> PortOutcome:
    status = probe(target, port, request.timeout, policy)
    if status is PortStatus.OPEN:
        return PortOutcome(port=port, status=status, service=classify(port, catalog))
    return PortOutcome(port=port, status=PortStatus.CLOSED)


def scan(
    target: Target,
    request: ScanRequest,
    catalog: Sequence[CatalogEntry],
    *,
    is_up: Callable[[Target], bool] = liveness.is_up,
    probe: Prober = probe_port,
    resolve_name: Callable[[Target], str] = display_name,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> ScanReport:
    """
    Sweeps ports 1..request.port_limit on one host.

    Nothing is probed unless the liveness check gets a reply. At most
    request.width probes are in flight: the dispatch loop takes a gate unit
    before each submit (and blocks when none is free), the task gives it back
    when it finishes. Every task returns its own PortOutcome; they are all
    joined before aggregation.
    """
    if target.name is None:
        target = replace(target, name=resolve_name(target))
    logger.info("Target %s (%s), ports 1-%d", target.address, target.name, request.port_limit)

    if not is_up(target):
        logger.warning("No ICMP reply from %s, skipping port sweep", target.address)
        return ScanReport(target=target, port_limit=request.port_limit, state=ScanState.HOST_DOWN)

    gate = threading.BoundedSemaphore(request.width)

    def task(port: int) -> PortOutcome:
        try:
            return probe_one(target, port, request, catalog, probe, policy)
        finally:
            gate.release()

    start = time.perf_counter()
    futures: List[Future] = []
    workers = min(request.width, request.port_limit)

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="probe") as pool:
        for port in range(1, request.port_limit + 1):
            gate.acquire()
            try:
                futures.append(pool.submit(task, port))
            except BaseException:
                gate.release()
                raise

        # Join barrier
        outcomes = [fut.result() for fut in futures]

    logger.debug(
        "Swept %d ports in %.2fs (width=%d)",
        len(outcomes),
        time.perf_counter() - start,
        request.width,
    )
    return aggregate(target, outcomes, request.port_limit)
